"""Administration API - Admin Only."""
import io
from flask import Blueprint, request, current_app
from flask_jwt_extended import jwt_required
import pandas as pd
from gatepass import limiter
from gatepass.services.gatepass_service import GatePassService
from gatepass.services.student_service import StudentService
from gatepass.services.tutor_service import TutorService
from gatepass.utils.decorators import admin_required
from gatepass.utils.helpers import success_response, error_response, request_data, file_extension

admin_bp = Blueprint('admin', __name__)

@admin_bp.route('/students', methods=['GET'])
@jwt_required()
@admin_required
def get_students():
    students = StudentService.list_students()
    return success_response(data=[s.to_dict() for s in students])

@admin_bp.route('/students/<int:student_id>', methods=['DELETE'])
@jwt_required()
@admin_required
def delete_student(student_id):
    StudentService.delete_student(student_id)
    return success_response(message='Student deleted successfully')

@admin_bp.route('/students/bulk', methods=['POST'])
@jwt_required()
@admin_required
@limiter.limit("5 per hour")
def import_students():
    """Register students from a CSV/Excel roster."""
    if 'file' not in request.files:
        return error_response("No file uploaded", 400)

    file = request.files['file']
    if file.filename == '':
        return error_response("No file selected", 400)

    extension = file_extension(file.filename)
    if extension not in current_app.config['ALLOWED_IMPORT_EXTENSIONS']:
        return error_response("Invalid file format. Use CSV or Excel", 400)

    # Keep numbers like phone and adm_no as text; registration parses them
    try:
        if extension == 'csv':
            df = pd.read_csv(io.StringIO(file.stream.read().decode("utf-8")), dtype=str)
        else:
            df = pd.read_excel(file.stream, dtype=str)
    except (ValueError, UnicodeDecodeError, pd.errors.ParserError) as e:
        return error_response(f"Error reading file: {str(e)}", 400)

    required_columns = ['adm_no', 'name', 'dept', 'sem', 'email', 'phone', 'password', 'tutor_name']
    missing_columns = [col for col in required_columns if col not in df.columns]
    if missing_columns:
        return error_response(f"Missing columns: {', '.join(missing_columns)}", 400)

    results = StudentService.import_students(df)

    return success_response(
        data={
            'total': len(results),
            'successful': len([r for r in results if r['success']]),
            'failed': len([r for r in results if not r['success']]),
            'results': results
        },
        message="Bulk import completed"
    )

@admin_bp.route('/tutors', methods=['GET'])
@jwt_required()
@admin_required
def get_tutors():
    tutors = TutorService.list_tutors()
    return success_response(data=[t.to_dict() for t in tutors])

@admin_bp.route('/tutors/<int:tutor_id>/verify', methods=['PUT'])
@jwt_required()
@admin_required
def verify_tutor(tutor_id):
    tutor = TutorService.verify_tutor(tutor_id)
    return success_response(data=tutor.to_dict(), message='Tutor approved successfully')

@admin_bp.route('/tutors/<int:tutor_id>', methods=['DELETE'])
@jwt_required()
@admin_required
def delete_tutor(tutor_id):
    TutorService.delete_tutor(tutor_id)
    return success_response(message='Tutor deleted successfully')

@admin_bp.route('/gate-passes', methods=['GET'])
@jwt_required()
@admin_required
def get_current_requests():
    """Students whose record holds a current pass."""
    students = StudentService.list_current_pass_holders()
    return success_response(data=[s.to_dict() for s in students])

@admin_bp.route('/gate-passes-detailed', methods=['GET'])
@jwt_required()
@admin_required
def get_all_passes():
    passes = GatePassService.list_all_passes()
    return success_response(
        data=[GatePassService.serialize_pass(p, include_tutor=True) for p in passes]
    )

@admin_bp.route('/gate-passes/<int:pass_id>/status', methods=['PUT'])
@jwt_required()
@admin_required
def override_pass_status(pass_id):
    """Set a pass's outcome even if it was already resolved."""
    data = request_data()
    gate_pass = GatePassService.resolve_approval(pass_id, data.get('status'), force=True)
    return success_response(
        data={'gate_pass': GatePassService.serialize_pass(gate_pass)},
        message='Gate pass updated successfully'
    )

@admin_bp.route('/gatepasses/<int:pass_id>', methods=['DELETE'])
@jwt_required()
@admin_required
def delete_pass(pass_id):
    GatePassService.delete_pass(pass_id)
    return success_response(message='Gate pass deleted successfully')
