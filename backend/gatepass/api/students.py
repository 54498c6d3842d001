"""Student dashboard API."""
from flask import Blueprint
from flask_jwt_extended import jwt_required
from gatepass.models.gate_pass import GatePassStatus
from gatepass.services.gatepass_service import GatePassService
from gatepass.services.student_service import StudentService
from gatepass.utils.decorators import student_owner_required
from gatepass.utils.exceptions import NotFoundError
from gatepass.utils.helpers import success_response, request_data

students_bp = Blueprint('students', __name__)

@students_bp.route('/student/<int:student_id>', methods=['GET'])
@jwt_required()
@student_owner_required
def get_student(student_id):
    """Student profile."""
    student = StudentService.get_student(student_id)
    return success_response(data=student.to_dict())

@students_bp.route('/student/<int:student_id>/photo', methods=['GET'])
@jwt_required()
@student_owner_required
def get_student_photo(student_id):
    """Student photo as a data URL."""
    student = StudentService.get_student(student_id)
    if not student.photo:
        raise NotFoundError("Image not found")
    return success_response(data={'photo': student.photo_url})

@students_bp.route('/form-fill/<int:student_id>', methods=['POST'])
@jwt_required()
@student_owner_required
def submit_gate_pass(student_id):
    """Submit a gate pass request for tutor approval."""
    data = request_data()

    gate_pass, student = GatePassService.submit_pass(
        student_id,
        purpose=data.get('purpose'),
        date=data.get('date'),
        return_time=data.get('return_time'),
        group_members=data.get('group_members')
    )

    return success_response(
        data={
            'gate_pass': gate_pass.to_dict(),
            'student': student.to_dict()
        },
        message='Gate pass submitted for tutor approval'
    )

@students_bp.route('/gatepasses/<int:student_id>', methods=['GET'])
@jwt_required()
@student_owner_required
def get_pass_history(student_id):
    """Every pass the student submitted or is a group member of."""
    passes = GatePassService.list_passes_for_student(student_id)
    return success_response(
        data=[GatePassService.serialize_pass(p) for p in passes],
        message=f"Found {len(passes)} gate passes"
    )

@students_bp.route('/student/approved-passes/<int:student_id>', methods=['GET'])
@jwt_required()
@student_owner_required
def get_approved_passes(student_id):
    passes = [
        p for p in GatePassService.list_passes_for_student(student_id)
        if p.status == GatePassStatus.APPROVED
    ]
    return success_response(data=[GatePassService.serialize_pass(p) for p in passes])
