"""Tutor dashboard API."""
from flask import Blueprint, g
from flask_jwt_extended import jwt_required
from gatepass.models.gate_pass import GatePassStatus
from gatepass.services.gatepass_service import GatePassService
from gatepass.services.notification_service import NotificationService
from gatepass.services.student_service import StudentService
from gatepass.services.tutor_service import TutorService
from gatepass.utils.decorators import tutor_required
from gatepass.utils.exceptions import NotFoundError
from gatepass.utils.helpers import success_response, request_data

tutors_bp = Blueprint('tutors', __name__)

def _tutor(tutor_id):
    """The authenticated tutor, or the requested one for administrators."""
    return g.current_tutor or TutorService.get_tutor(tutor_id)

@tutors_bp.route('/<int:tutor_id>', methods=['GET'])
@jwt_required()
@tutor_required
def get_tutor(tutor_id):
    return success_response(data=_tutor(tutor_id).to_dict())

@tutors_bp.route('/<int:tutor_id>/photo', methods=['GET'])
@jwt_required()
@tutor_required
def get_tutor_photo(tutor_id):
    tutor = _tutor(tutor_id)
    if not tutor.photo:
        raise NotFoundError("Image not found")
    return success_response(data={'photo': tutor.photo_url})

@tutors_bp.route('/<int:tutor_id>/students', methods=['GET'])
@jwt_required()
@tutor_required
def get_roster(tutor_id):
    """Students assigned to the tutor."""
    students = TutorService.roster(_tutor(tutor_id))
    return success_response(data=[s.to_dict() for s in students])

@tutors_bp.route('/<int:tutor_id>/pending-passes', methods=['GET'])
@jwt_required()
@tutor_required
def get_pending_passes(tutor_id):
    passes = TutorService.roster_passes(_tutor(tutor_id), GatePassStatus.PENDING)
    return success_response(data=[TutorService.format_roster_pass(p) for p in passes])

@tutors_bp.route('/<int:tutor_id>/approved-passes', methods=['GET'])
@jwt_required()
@tutor_required
def get_approved_passes(tutor_id):
    passes = TutorService.roster_passes(_tutor(tutor_id), GatePassStatus.APPROVED)
    return success_response(data=[TutorService.format_roster_pass(p) for p in passes])

@tutors_bp.route('/gatepass/<int:pass_id>/approve', methods=['POST'])
@jwt_required()
@tutor_required
def resolve_gate_pass(pass_id):
    """Approve or reject a pending gate pass (``{"status": "approved" | "rejected"}``)."""
    data = request_data()
    status = data.get('status')

    gate_pass = GatePassService.resolve_approval(pass_id, status, approver_id=g.current_tutor.id)

    return success_response(
        data={'gate_pass': GatePassService.serialize_pass(gate_pass)},
        message=f'Gate pass {status} successfully'
    )

@tutors_bp.route('/<int:tutor_id>/students/<int:student_id>/approve', methods=['POST'])
@jwt_required()
@tutor_required
def approve_registration(tutor_id, student_id):
    """Accept a student's registration."""
    student = StudentService.approve_registration(_tutor(tutor_id), student_id)
    return success_response(data=student.to_dict(), message='Student approved successfully')

@tutors_bp.route('/<int:tutor_id>/notifications', methods=['GET'])
@jwt_required()
@tutor_required
def get_notifications(tutor_id):
    feed = NotificationService.get_feed(_tutor(tutor_id))
    return success_response(data=feed, message=f"Found {feed['count']} notifications")

@tutors_bp.route('/<int:tutor_id>/notifications/<notification_id>/read', methods=['POST'])
@jwt_required()
@tutor_required
def mark_notification_read(tutor_id, notification_id):
    NotificationService.mark_read(_tutor(tutor_id), notification_id)
    return success_response(
        data={'notification_id': notification_id},
        message='Notification marked as read'
    )

@tutors_bp.route('/<int:tutor_id>/notifications/read-all', methods=['POST'])
@jwt_required()
@tutor_required
def mark_all_notifications_read(tutor_id):
    marked = NotificationService.mark_all_read(_tutor(tutor_id))
    return success_response(
        data={'tutor_id': tutor_id, 'marked': marked},
        message='All notifications marked as read'
    )
