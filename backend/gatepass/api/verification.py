"""Gate verification: QR codes, the page the QR code points to, and bulk verification."""
from flask import Blueprint, render_template, url_for
from flask_jwt_extended import jwt_required
from gatepass.services.gatepass_service import GatePassService
from gatepass.services.qr_service import QRService
from gatepass.services.student_service import StudentService
from gatepass.utils.decorators import student_owner_required
from gatepass.utils.exceptions import NotFoundError
from gatepass.utils.helpers import success_response, request_data

verification_bp = Blueprint('verification', __name__)

@verification_bp.route('/gatepass/<int:student_id>', methods=['GET'])
def verification_page(student_id):
    """HTML page opened by scanning a student's QR code."""
    try:
        view = GatePassService.build_verification_view(student_id)
    except NotFoundError:
        return render_template('not_found.html', message='Student not found'), 404

    return render_template('verification.html', view=view)

@verification_bp.route('/gatepass/<int:student_id>/view', methods=['GET'])
def verification_view(student_id):
    """The verification page's content as JSON."""
    view = GatePassService.build_verification_view(student_id)
    return success_response(data=view.to_dict())

@verification_bp.route('/verify-students', methods=['POST'])
def verify_students():
    """Mark the checked members as verified."""
    data = request_data()
    updated = StudentService.verify_students(data.get('student_ids'))
    return success_response(
        data={'updated': updated},
        message='Students verified successfully'
    )

@verification_bp.route('/generate-qr/<int:student_id>', methods=['POST'])
@jwt_required()
@student_owner_required
def generate_qr(student_id):
    """QR code pointing at the student's verification page."""
    student = StudentService.get_student(student_id)
    verify_url = url_for('verification.verification_page', student_id=student.id, _external=True)

    return success_response(data={
        'qr_image': QRService.generate_qr_data_url(verify_url),
        'verify_url': verify_url,
        'student_data': {
            'name': student.name,
            'adm_no': student.adm_no,
            'dept': student.dept
        }
    })
