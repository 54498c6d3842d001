"""Database seeding service for demo data."""
from gatepass import db
from gatepass.models.student import Student
from gatepass.models.tutor import Tutor

class SeedService:
    """Service to seed database with demo tutors and students."""

    TUTORS = [
        ('T1001', 'Anita Raman', 'CSE', 'anita.raman@college.edu'),
        ('T1002', 'Joseph Mathew', 'ECE', 'joseph.mathew@college.edu'),
    ]

    @staticmethod
    def seed_all() -> dict:
        """Seed all demo data."""
        tutors = SeedService.seed_tutors()
        students = SeedService.seed_students(tutors)
        return {'tutors': len(tutors), 'students': len(students)}

    @staticmethod
    def seed_tutors() -> list:
        """Approved tutors, password ``tutor123``."""
        tutors = []
        for emp_id, name, dept, email in SeedService.TUTORS:
            tutor = Tutor.query.filter_by(emp_id=emp_id).first()
            if not tutor:
                tutor = Tutor(emp_id=emp_id, name=name, dept=dept, email=email)
                tutor.set_password('tutor123')
                tutor.approve()
                db.session.add(tutor)
            tutors.append(tutor)

        db.session.commit()
        return tutors

    @staticmethod
    def seed_students(tutors: list) -> list:
        """Three students per tutor, password ``student123``."""
        students = []
        for tutor_index, tutor in enumerate(tutors):
            for offset in range(1, 4):
                adm_no = 1000 * (tutor_index + 1) + offset
                student = Student.query.filter_by(adm_no=adm_no).first()
                if not student:
                    student = Student(
                        adm_no=adm_no,
                        name=f'Student {adm_no}',
                        dept=tutor.dept,
                        sem=offset * 2,
                        tutor_id=tutor.id,
                        tutor_name=tutor.name,
                        email=f'student{adm_no}@college.edu',
                        phone=f'98765{adm_no:05d}',
                        verified=offset != 3
                    )
                    student.set_password('student123')
                    db.session.add(student)
                students.append(student)

        db.session.commit()
        return students
