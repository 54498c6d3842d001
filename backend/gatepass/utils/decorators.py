"""Custom decorators for authorization."""
from functools import wraps
from flask import g
from flask_jwt_extended import get_jwt, get_jwt_identity
from gatepass.models.tutor import Tutor
from gatepass.utils.helpers import error_response

def _role() -> str:
    return get_jwt().get('role')

def admin_required(f):
    """Decorator to require the administrator token."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if _role() != 'admin':
            return error_response("Admin access required", 403)

        return f(*args, **kwargs)
    return decorated_function

def tutor_required(f):
    """Decorator to require a verified tutor.

    When the route takes a ``tutor_id`` it must be the caller's own id;
    administrators may act on any tutor.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        role = _role()
        if role == 'admin' and 'tutor_id' in kwargs:
            g.current_tutor = None
            return f(*args, **kwargs)

        if role != 'tutor':
            return error_response("Tutor access required", 403)

        tutor = Tutor.get_by_id(int(get_jwt_identity()))
        if not tutor:
            return error_response("Tutor not found", 404)

        if not tutor.verified:
            return error_response("Tutor account is pending admin approval", 403)

        if 'tutor_id' in kwargs and kwargs['tutor_id'] != tutor.id:
            return error_response("Cannot access another tutor's records", 403)

        g.current_tutor = tutor
        return f(*args, **kwargs)
    return decorated_function

def student_owner_required(f):
    """Decorator to require the student named by ``student_id`` (or an admin)."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        role = _role()
        if role == 'admin':
            return f(*args, **kwargs)

        if role != 'student':
            return error_response("Student access required", 403)

        if str(kwargs.get('student_id')) != str(get_jwt_identity()):
            return error_response("Cannot access another student's records", 403)

        return f(*args, **kwargs)
    return decorated_function
