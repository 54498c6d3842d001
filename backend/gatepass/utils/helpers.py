"""Helper functions for the application."""
from datetime import datetime, timezone
from flask import jsonify, request, current_app
from typing import Any, List, Optional
from gatepass.utils.exceptions import ValidationFailedError

def handle_error(message, status_code: int, errors: Optional[List[str]] = None):
    """Handle application errors with consistent format."""
    response = {
        'error': True,
        'message': str(message),
        'status_code': status_code
    }
    if errors:
        response['errors'] = errors
    return jsonify(response), status_code

def success_response(data: Any = None, message: str = "Success", meta: dict = None):
    """Return consistent success response."""
    response = {
        'error': False,
        'message': message
    }

    if data is not None:
        response['data'] = data
    if meta is not None:
        response['meta'] = meta

    return jsonify(response)

def error_response(message: str, status_code: int = 400):
    """Return consistent error response."""
    return handle_error(message, status_code)

def parse_datetime(value) -> Optional[datetime]:
    """Parse an ISO-8601 date or datetime string; None if unparseable."""
    if isinstance(value, datetime):
        return value
    if not value or not isinstance(value, str):
        return None
    try:
        parsed = datetime.fromisoformat(value.strip().replace('Z', '+00:00'))
    except ValueError:
        return None
    # Stored naive, in UTC
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed

def file_extension(filename: str) -> str:
    return filename.rsplit('.', 1)[1].lower() if filename and '.' in filename else ''

def request_data() -> dict:
    """Body of a JSON or multipart/form request as a plain dict."""
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    return request.form.to_dict()

def uploaded_photo(field: str = 'image'):
    """``(bytes, mimetype)`` of an uploaded image, or ``(None, None)``."""
    file = request.files.get(field)
    if file is None or not file.filename:
        return None, None

    allowed = current_app.config.get('ALLOWED_IMAGE_EXTENSIONS', set())
    if file_extension(file.filename) not in allowed:
        raise ValidationFailedError("Invalid image format", errors=[f"Allowed: {', '.join(sorted(allowed))}"])

    return file.read(), file.mimetype or 'image/jpeg'
