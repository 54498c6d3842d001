"""Student directory service."""
from typing import Dict, List, Optional, Iterable
from flask import current_app
from sqlalchemy import or_
import pandas as pd
from gatepass import db
from gatepass.models.student import Student, StudentKind
from gatepass.models.tutor import Tutor
from gatepass.utils.exceptions import NotFoundError, ValidationFailedError, ConflictError
from gatepass.utils.validators import Validator

def _cell(value):
    """Plain Python value of a spreadsheet cell."""
    if pd.isna(value):
        return None
    return value.item() if hasattr(value, 'item') else value

class StudentService:
    """Service for managing student records."""

    @staticmethod
    def get_student(student_id: int) -> Student:
        student = Student.get_by_id(student_id)
        if not student:
            raise NotFoundError("Student not found")
        return student

    @staticmethod
    def find_by_adm_no(adm_no: int) -> Optional[Student]:
        return Student.query.filter_by(adm_no=adm_no).first()

    @staticmethod
    def resolve_tutor_id(tutor_id=None, tutor_name: str = None) -> Optional[int]:
        """Explicit tutor id wins; otherwise match a tutor by exact name."""
        if tutor_id not in (None, ''):
            parsed = Validator.parse_int(tutor_id)
            if parsed is None or not Tutor.get_by_id(parsed):
                raise ValidationFailedError("Validation failed", errors=['Unknown tutor'])
            return parsed

        if tutor_name:
            tutor = Tutor.query.filter_by(name=tutor_name.strip()).first()
            if tutor:
                return tutor.id
        return None

    @staticmethod
    def register_student(data: Dict, photo: bytes = None, photo_mimetype: str = None, commit: bool = True) -> Student:
        """Create a registered student, or claim the placeholder holding its admission number."""
        required = ['adm_no', 'name', 'dept', 'sem', 'phone', 'email', 'password']
        errors = Validator.validate_required_fields(data, required)['errors']
        if not (data.get('tutor_name') or data.get('tutor_id')):
            errors.append('tutor_name is required')
        if errors:
            raise ValidationFailedError("All fields are required", errors=errors)

        errors = Validator.validate_student_registration(data)
        if errors:
            raise ValidationFailedError("Validation failed", errors=errors)

        adm_no = Validator.parse_int(data['adm_no'])
        email = data['email'].strip().lower()

        existing = Student.query.filter(or_(Student.adm_no == adm_no, Student.email == email)).all()
        placeholder = None
        for record in existing:
            if record.adm_no == adm_no and record.is_placeholder:
                placeholder = record
            else:
                raise ConflictError("Student with this admission number or email already exists")

        tutor_id = StudentService.resolve_tutor_id(data.get('tutor_id'), data.get('tutor_name'))
        tutor_name = data.get('tutor_name')
        if tutor_id and not tutor_name:
            tutor_name = Tutor.get_by_id(tutor_id).name

        student = placeholder or Student(adm_no=adm_no)
        student.kind = StudentKind.REGISTERED
        student.name = str(data['name']).strip()
        student.dept = str(data['dept']).strip()
        student.sem = Validator.parse_int(data['sem'])
        student.tutor_id = tutor_id
        student.tutor_name = str(tutor_name).strip() if tutor_name else None
        student.phone = str(data['phone']).strip()
        student.email = email
        student.verified = False
        student.set_password(data['password'])
        if photo:
            student.set_photo(photo, photo_mimetype)

        db.session.add(student)
        if commit:
            db.session.commit()
            current_app.logger.info(
                'Student %s registered%s', adm_no, ' (claimed placeholder)' if placeholder else ''
            )
        return student

    @staticmethod
    def list_students() -> List[Student]:
        return Student.query.order_by(Student.adm_no).all()

    @staticmethod
    def list_current_pass_holders() -> List[Student]:
        """Students whose record carries a current pass purpose and date."""
        return Student.query.filter(
            Student.purpose.isnot(None),
            Student.date.isnot(None)
        ).order_by(Student.date.desc()).all()

    @staticmethod
    def verify_students(student_ids: Iterable) -> int:
        """Set ``verified`` on every listed student; non-integer ids are skipped."""
        if not isinstance(student_ids, (list, tuple, set)):
            raise ValidationFailedError("studentIds must be a list")

        ids = {parsed for parsed in (Validator.parse_int(value) for value in student_ids) if parsed is not None}
        if not ids:
            return 0

        updated = Student.query.filter(Student.id.in_(ids)).update(
            {Student.verified: True}, synchronize_session=False
        )
        db.session.commit()
        current_app.logger.info('Verified %d students', updated)
        return updated

    @staticmethod
    def approve_registration(tutor: Tutor, student_id: int) -> Student:
        """Tutor accepts the registration of a student on their roster."""
        student = StudentService.get_student(student_id)
        if student.is_placeholder:
            raise ValidationFailedError("Placeholder students cannot be approved")
        if student.tutor_id != tutor.id:
            raise NotFoundError("Student not found in this tutor's roster")

        student.verified = True
        db.session.commit()
        return student

    @staticmethod
    def delete_student(student_id: int) -> None:
        student = StudentService.get_student(student_id)
        adm_no = student.adm_no
        student.delete()
        current_app.logger.info('Deleted student %s', adm_no)

    @staticmethod
    def import_students(df: pd.DataFrame) -> List[Dict]:
        """Register every row of a roster sheet; one result per row."""
        results = []

        for index, row in df.iterrows():
            record = {
                key: _cell(value)
                for key, value in row.to_dict().items()
            }
            try:
                student = StudentService.register_student(record, commit=False)
                results.append({
                    'row': index + 2,  # Spreadsheet row number
                    'adm_no': student.adm_no,
                    'success': True
                })
            except (ValidationFailedError, ConflictError) as e:
                results.append({
                    'row': index + 2,
                    'adm_no': record.get('adm_no'),
                    'success': False,
                    'error': '; '.join(e.errors) if e.errors else e.message
                })

        db.session.commit()
        return results
