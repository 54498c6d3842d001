"""Authentication service for students, tutors and the administrator."""
import hmac
from typing import Dict
from flask import current_app
from flask_jwt_extended import create_access_token
from gatepass.models.student import Student
from gatepass.models.tutor import Tutor
from gatepass.utils.exceptions import UnauthorizedError, ForbiddenError, ValidationFailedError
from gatepass.utils.validators import Validator

class AuthService:

    @staticmethod
    def issue_token(identity, role: str) -> str:
        """Access token whose identity is the account id and whose ``role`` claim names the account type."""
        return create_access_token(identity=str(identity), additional_claims={'role': role})

    @staticmethod
    def login_student(adm_no, password: str) -> Dict:
        """Authenticate a student by admission number."""
        parsed = Validator.parse_int(adm_no)
        if parsed is None or not password:
            raise ValidationFailedError("Admission number and password are required")

        student = Student.query.filter_by(adm_no=parsed).first()
        if not student or not student.check_password(password):
            raise UnauthorizedError("Invalid credentials")

        return {
            'access_token': AuthService.issue_token(student.id, 'student'),
            'student': student.to_dict()
        }

    @staticmethod
    def login_tutor(emp_id, password: str) -> Dict:
        """Authenticate a tutor; unapproved accounts are refused."""
        if not emp_id or not password:
            raise ValidationFailedError("Employee ID and password are required")

        tutor = Tutor.query.filter_by(emp_id=str(emp_id).strip()).first()
        if not tutor or not tutor.check_password(password):
            raise UnauthorizedError("Invalid credentials")

        if not tutor.verified:
            raise ForbiddenError("Your account is pending admin approval. Please wait for approval.")

        return {
            'access_token': AuthService.issue_token(tutor.id, 'tutor'),
            'tutor': tutor.to_dict()
        }

    @staticmethod
    def login_admin(username: str, password: str) -> Dict:
        """Authenticate against the configured administrator credentials."""
        expected_user = current_app.config.get('ADMIN_USERNAME')
        expected_password = current_app.config.get('ADMIN_PASSWORD')
        if not expected_user or not expected_password:
            raise UnauthorizedError("Admin login is not configured")

        valid = (
            hmac.compare_digest(str(username or ''), expected_user)
            and hmac.compare_digest(str(password or ''), expected_password)
        )
        if not valid:
            raise UnauthorizedError("Invalid admin credentials")

        return {'access_token': AuthService.issue_token('admin', 'admin')}
