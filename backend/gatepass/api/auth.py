"""Account API: registration and login for students, tutors and the administrator."""
from flask import Blueprint
from gatepass import limiter
from gatepass.services.auth_service import AuthService
from gatepass.services.student_service import StudentService
from gatepass.services.tutor_service import TutorService
from gatepass.utils.helpers import success_response, request_data, uploaded_photo

auth_bp = Blueprint("auth", __name__)

@auth_bp.route("/register", methods=["POST"])
def register_student():
    """Student registration (JSON or multipart with an ``image`` file)."""
    data = request_data()
    photo, mimetype = uploaded_photo()

    student = StudentService.register_student(data, photo=photo, photo_mimetype=mimetype)

    return success_response(
        data={"student_id": student.id},
        message="Registration successful"
    ), 201

@auth_bp.route("/login", methods=["POST"])
@limiter.limit("5 per minute")
def login_student():
    """Student login with admission number and password."""
    data = request_data()
    result = AuthService.login_student(data.get("adm_no"), data.get("password"))

    return success_response(data=result, message="Login successful")

@auth_bp.route("/tutor/register", methods=["POST"])
def register_tutor():
    """Tutor registration; the account stays inactive until an admin approves it."""
    data = request_data()
    photo, mimetype = uploaded_photo()

    tutor = TutorService.register_tutor(data, photo=photo, photo_mimetype=mimetype)

    return success_response(
        data={"tutor_id": tutor.id},
        message="Tutor registered successfully and awaiting admin verification"
    )

@auth_bp.route("/tutor/login", methods=["POST"])
@limiter.limit("5 per minute")
def login_tutor():
    data = request_data()
    result = AuthService.login_tutor(data.get("emp_id"), data.get("password"))

    return success_response(data=result, message="Login successful")

@auth_bp.route("/admin/login", methods=["POST"])
@limiter.limit("5 per minute")
def login_admin():
    data = request_data()
    result = AuthService.login_admin(data.get("username"), data.get("password"))

    return success_response(data=result, message="Admin login successful")
