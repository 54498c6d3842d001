"""Tutor accounts and the roster views tutors work from."""
from typing import Dict, List
from flask import current_app
from sqlalchemy import or_
from gatepass import db
from gatepass.models.gate_pass import GatePass, GatePassStatus
from gatepass.models.student import Student
from gatepass.models.tutor import Tutor, TutorStatus
from gatepass.utils.exceptions import NotFoundError, ValidationFailedError, ConflictError
from gatepass.utils.validators import Validator

class TutorService:
    """Service for tutor registration, approval and roster queries."""

    @staticmethod
    def get_tutor(tutor_id: int) -> Tutor:
        tutor = Tutor.get_by_id(tutor_id)
        if not tutor:
            raise NotFoundError("Tutor not found")
        return tutor

    @staticmethod
    def register_tutor(data: Dict, photo: bytes = None, photo_mimetype: str = None) -> Tutor:
        """Create a tutor awaiting administrator approval."""
        errors = Validator.validate_required_fields(data, ['emp_id', 'name', 'dept', 'email', 'password'])['errors']
        if errors:
            raise ValidationFailedError("All fields are required", errors=errors)

        if not Validator.validate_email(data['email']):
            errors.append('Valid email required')
        errors.extend(Validator.validate_name(data['name'])['errors'])
        errors.extend(Validator.validate_password(data['password'])['errors'])
        if errors:
            raise ValidationFailedError("Validation failed", errors=errors)

        emp_id = str(data['emp_id']).strip()
        email = data['email'].strip().lower()
        if Tutor.query.filter(or_(Tutor.emp_id == emp_id, Tutor.email == email)).first():
            raise ConflictError("Tutor with this employee ID or email already exists")

        tutor = Tutor(
            emp_id=emp_id,
            name=str(data['name']).strip(),
            dept=str(data['dept']).strip(),
            email=email,
            verified=False,
            status=TutorStatus.PENDING
        )
        tutor.set_password(data['password'])
        if photo:
            tutor.set_photo(photo, photo_mimetype)

        tutor.save()
        current_app.logger.info('Tutor %s registered, awaiting approval', emp_id)
        return tutor

    @staticmethod
    def list_tutors() -> List[Tutor]:
        return Tutor.query.order_by(Tutor.name).all()

    @staticmethod
    def verify_tutor(tutor_id: int) -> Tutor:
        """Administrator approval; the only way a tutor becomes active."""
        tutor = TutorService.get_tutor(tutor_id)
        tutor.approve()
        db.session.commit()
        current_app.logger.info('Tutor %s approved', tutor.emp_id)
        return tutor

    @staticmethod
    def delete_tutor(tutor_id: int) -> None:
        tutor = TutorService.get_tutor(tutor_id)
        emp_id = tutor.emp_id
        tutor.delete()
        current_app.logger.info('Deleted tutor %s', emp_id)

    @staticmethod
    def roster(tutor: Tutor) -> List[Student]:
        return Student.query.filter_by(tutor_id=tutor.id).order_by(Student.adm_no).all()

    @staticmethod
    def roster_passes(tutor: Tutor, status: GatePassStatus, limit: int = None) -> List[GatePass]:
        """Passes whose primary student is on the tutor's roster, newest first."""
        query = (
            GatePass.query
            .join(Student, GatePass.student_id == Student.id)
            .filter(Student.tutor_id == tutor.id, GatePass.status == status)
            .order_by(GatePass.created_at.desc(), GatePass.id.desc())
        )
        if limit:
            query = query.limit(limit)
        return query.all()

    @staticmethod
    def format_roster_pass(gate_pass: GatePass) -> Dict:
        """Pass fields with the primary student's details flattened in."""
        student = Student.get_by_id(gate_pass.student_id) if gate_pass.student_id else None
        result = {
            'id': gate_pass.id,
            'purpose': gate_pass.purpose,
            'date': gate_pass.date.isoformat() if gate_pass.date else None,
            'return_time': gate_pass.return_time,
            'group_members': [member.to_dict() for member in gate_pass.group_members],
            'status': gate_pass.status.value,
            'created_at': gate_pass.created_at.isoformat(),
            'approved_at': gate_pass.approved_at.isoformat() if gate_pass.approved_at else None,
            'student_id': gate_pass.student_id,
        }
        if student:
            result.update({
                'student_name': student.name,
                'student_adm_no': student.adm_no,
                'student_dept': student.dept,
                'student_sem': student.sem,
            })
        return result
