"""Swagger/OpenAPI configuration for the application."""

# Swagger UI configuration
SWAGGER_URL = '/api/docs'
API_URL = '/api/swagger.json'

# (method, path, tag, summary, secured)
ENDPOINTS = [
    ('post', '/register', 'Accounts', 'Register a student (JSON or multipart with image)', False),
    ('post', '/login', 'Accounts', 'Student login with admission number', False),
    ('post', '/tutor/register', 'Accounts', 'Register a tutor pending admin approval', False),
    ('post', '/tutor/login', 'Accounts', 'Tutor login (403 until approved)', False),
    ('post', '/admin/login', 'Accounts', 'Administrator login', False),
    ('get', '/student/{student_id}', 'Students', 'Student profile', True),
    ('get', '/student/{student_id}/photo', 'Students', 'Student photo as data URL', True),
    ('post', '/form-fill/{student_id}', 'Gate Passes', 'Submit a gate pass request', True),
    ('get', '/gatepasses/{student_id}', 'Gate Passes', 'Deduplicated pass history, newest first', True),
    ('get', '/student/approved-passes/{student_id}', 'Gate Passes', 'Approved passes of a student', True),
    ('get', '/gatepass/{student_id}', 'Verification', 'HTML verification page', False),
    ('get', '/gatepass/{student_id}/view', 'Verification', 'Verification page data', False),
    ('post', '/verify-students', 'Verification', 'Bulk verify students', False),
    ('post', '/generate-qr/{student_id}', 'Verification', 'QR code for the verification page', True),
    ('get', '/tutor/{tutor_id}', 'Tutors', 'Tutor profile', True),
    ('get', '/tutor/{tutor_id}/photo', 'Tutors', 'Tutor photo as data URL', True),
    ('get', '/tutor/{tutor_id}/students', 'Tutors', 'Tutor roster', True),
    ('get', '/tutor/{tutor_id}/pending-passes', 'Tutors', 'Pending passes of the roster', True),
    ('get', '/tutor/{tutor_id}/approved-passes', 'Tutors', 'Approved passes of the roster', True),
    ('post', '/tutor/gatepass/{pass_id}/approve', 'Tutors', 'Approve or reject a pending pass', True),
    ('post', '/tutor/{tutor_id}/students/{student_id}/approve', 'Tutors', 'Approve a student registration', True),
    ('get', '/tutor/{tutor_id}/notifications', 'Notifications', 'Notification feed', True),
    ('post', '/tutor/{tutor_id}/notifications/{notification_id}/read', 'Notifications', 'Mark one notification read', True),
    ('post', '/tutor/{tutor_id}/notifications/read-all', 'Notifications', 'Mark all notifications read', True),
    ('get', '/admin/students', 'Admin', 'All students', True),
    ('delete', '/admin/students/{student_id}', 'Admin', 'Delete a student', True),
    ('post', '/admin/students/bulk', 'Admin', 'Import students from CSV/Excel', True),
    ('get', '/admin/tutors', 'Admin', 'All tutors', True),
    ('put', '/admin/tutors/{tutor_id}/verify', 'Admin', 'Approve a tutor', True),
    ('delete', '/admin/tutors/{tutor_id}', 'Admin', 'Delete a tutor', True),
    ('get', '/admin/gate-passes', 'Admin', 'Students holding a current pass', True),
    ('get', '/admin/gate-passes-detailed', 'Admin', 'All passes with student details', True),
    ('put', '/admin/gate-passes/{pass_id}/status', 'Admin', 'Override a pass status', True),
    ('delete', '/admin/gatepasses/{pass_id}', 'Admin', 'Delete a gate pass', True),
]

def _path_parameters(path: str) -> list:
    parameters = []
    for segment in path.split('/'):
        if segment.startswith('{') and segment.endswith('}'):
            name = segment[1:-1]
            parameters.append({
                "name": name,
                "in": "path",
                "required": True,
                "schema": {"type": "string" if name == 'notification_id' else "integer"}
            })
    return parameters

def generate_swagger_spec():
    """Generate OpenAPI/Swagger specification."""
    paths = {}
    for method, path, tag, summary, secured in ENDPOINTS:
        operation = {
            "tags": [tag],
            "summary": summary,
            "parameters": _path_parameters(path),
            "responses": {
                "200": {
                    "description": "Success",
                    "content": {"application/json": {"schema": {"$ref": "#/components/schemas/Success"}}}
                },
                "default": {
                    "description": "Error",
                    "content": {"application/json": {"schema": {"$ref": "#/components/schemas/Error"}}}
                }
            }
        }
        if secured:
            operation["security"] = [{"bearerAuth": []}]
        paths.setdefault(path, {})[method] = operation

    return {
        "openapi": "3.0.0",
        "info": {
            "title": "Campus Gate Pass API",
            "description": "Gate pass requests, tutor approval and gate verification",
            "version": "1.0.0"
        },
        "components": {
            "securitySchemes": {
                "bearerAuth": {
                    "type": "http",
                    "scheme": "bearer",
                    "bearerFormat": "JWT"
                }
            },
            "schemas": {
                "Error": {
                    "type": "object",
                    "properties": {
                        "error": {"type": "boolean"},
                        "message": {"type": "string"},
                        "status_code": {"type": "integer"},
                        "errors": {"type": "array", "items": {"type": "string"}}
                    }
                },
                "Success": {
                    "type": "object",
                    "properties": {
                        "error": {"type": "boolean", "default": False},
                        "message": {"type": "string"},
                        "data": {"type": "object"}
                    }
                }
            }
        },
        "paths": paths
    }
