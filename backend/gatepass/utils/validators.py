"""Validation utilities for the application."""
import re
from typing import Dict, List, Any, Optional

class Validator:
    """Validation helper class."""

    @staticmethod
    def validate_email(email: str) -> bool:
        """Validate email format."""
        if not email or not isinstance(email, str):
            return False
        pattern = r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$'
        return bool(re.match(pattern, email))

    @staticmethod
    def validate_password(password: str) -> Dict[str, Any]:
        """Validate password strength."""
        errors = []

        if not password or not isinstance(password, str):
            errors.append("Password is required")
        elif len(password) < 6:
            errors.append("Password must be at least 6 characters")
        elif len(password) > 128:
            errors.append("Password is too long")

        return {
            "is_valid": len(errors) == 0,
            "errors": errors
        }

    @staticmethod
    def validate_name(name: str) -> Dict[str, Any]:
        """Validate a person's name."""
        errors = []

        if not name or not str(name).strip():
            errors.append("Name is required")
        elif len(str(name).strip()) < 2:
            errors.append("Name must be at least 2 characters long")
        elif len(str(name).strip()) > 255:
            errors.append("Name is too long")

        return {
            "is_valid": len(errors) == 0,
            "errors": errors
        }

    @staticmethod
    def validate_required_fields(data: Dict, required_fields: List[str]) -> Dict[str, Any]:
        """Validate required fields in data."""
        errors = []

        for field in required_fields:
            value = data.get(field)
            if value is None or (isinstance(value, str) and not value.strip()):
                errors.append(f"{field} is required")

        return {
            "is_valid": len(errors) == 0,
            "errors": errors
        }

    @staticmethod
    def parse_int(value) -> Optional[int]:
        """Integer value of an int or numeric string, else None."""
        if isinstance(value, bool):
            return None
        if isinstance(value, int):
            return value
        if isinstance(value, float) and value.is_integer():
            return int(value)
        if isinstance(value, str) and re.fullmatch(r'\s*\d+\s*', value):
            return int(value)
        return None

    @staticmethod
    def validate_phone(phone) -> bool:
        """Ten-digit phone number."""
        return bool(phone is not None and re.fullmatch(r'\d{10}', str(phone).strip()))

    @staticmethod
    def validate_student_registration(data: Dict) -> List[str]:
        """Field-level checks for a student registration."""
        errors = []
        if Validator.parse_int(data.get('adm_no')) is None:
            errors.append('Valid admission number required')
        if not Validator.validate_name(data.get('name'))['is_valid']:
            errors.append('Valid name required')
        if not Validator.validate_email(data.get('email')):
            errors.append('Valid email required')
        if not Validator.validate_phone(data.get('phone')):
            errors.append('Valid 10-digit phone number required')
        if Validator.parse_int(data.get('sem')) is None:
            errors.append('Valid semester required')
        errors.extend(Validator.validate_password(data.get('password'))['errors'])
        return errors

    @staticmethod
    def validate_group_members(members) -> List[str]:
        """Shape checks for submitted group-member descriptors."""
        if members is None:
            return []
        if not isinstance(members, list):
            return ['group_members must be a list']

        errors = []
        for index, member in enumerate(members):
            if not isinstance(member, dict):
                errors.append(f'group_members[{index}] must be an object')
                continue
            for key in ('adm_no', 'admission_no'):
                value = member.get(key)
                if value not in (None, '') and Validator.parse_int(value) is None:
                    errors.append(f'group_members[{index}].{key} must be a number')
        return errors
