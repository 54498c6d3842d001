"""Test account registration and login endpoints."""
import io
import json
from gatepass.models.student import Student, StudentKind
from gatepass.models.tutor import Tutor
from conftest import auth_header, make_tutor, register_student, login_student, STUDENT_PASSWORD

def test_health_check(client):
    response = client.get('/health')
    assert response.status_code == 200
    assert json.loads(response.data)['status'] == 'healthy'

def test_register_success(client, tutor):
    """Registration links the tutor by name and starts unverified."""
    student_id = register_student(client, 3001)

    student = Student.get_by_id(student_id)
    assert student.kind == StudentKind.REGISTERED
    assert student.tutor_id == tutor.id
    assert student.verified is False
    assert student.check_password(STUDENT_PASSWORD)

def test_register_with_photo(client, tutor):
    response = client.post('/register', data={
        'adm_no': '3002',
        'name': 'Photo Student',
        'dept': 'CSE',
        'sem': '2',
        'phone': '9876543210',
        'email': 'photo@college.edu',
        'password': STUDENT_PASSWORD,
        'tutor_name': tutor.name,
        'image': (io.BytesIO(b'fake-png-bytes'), 'me.png'),
    }, content_type='multipart/form-data')

    assert response.status_code == 201
    student = Student.get_by_id(response.get_json()['data']['student_id'])
    assert student.photo == b'fake-png-bytes'
    assert student.photo_url.startswith('data:image/png;base64,')

def test_register_missing_fields(client):
    response = client.post('/register', json={'adm_no': 1})
    assert response.status_code == 400
    data = response.get_json()
    assert data['error'] is True
    assert 'name is required' in data['errors']
    assert 'tutor_name is required' in data['errors']

def test_register_validation(client, tutor):
    response = client.post('/register', json={
        'adm_no': 'abc',
        'name': 'Bad Data',
        'dept': 'CSE',
        'sem': 3,
        'phone': '123',
        'email': 'not-an-email',
        'password': STUDENT_PASSWORD,
        'tutor_name': tutor.name,
    })
    assert response.status_code == 400
    errors = response.get_json()['errors']
    assert 'Valid admission number required' in errors
    assert 'Valid email required' in errors
    assert 'Valid 10-digit phone number required' in errors

def test_register_duplicate_is_conflict(client, tutor):
    register_student(client, 3003)

    response = client.post('/register', json={
        'adm_no': 3003,
        'name': 'Someone Else',
        'dept': 'CSE',
        'sem': 3,
        'phone': '9876543210',
        'email': 'other@college.edu',
        'password': STUDENT_PASSWORD,
        'tutor_name': tutor.name,
    })
    assert response.status_code == 409

def test_register_claims_placeholder(client, tutor):
    placeholder = Student(kind=StudentKind.PLACEHOLDER, adm_no=3004, name='Unknown', dept='')
    placeholder.save()

    student_id = register_student(client, 3004, name='Real Name')

    assert student_id == placeholder.id
    assert Student.query.filter_by(adm_no=3004).count() == 1
    claimed = Student.get_by_id(student_id)
    assert claimed.kind == StudentKind.REGISTERED
    assert claimed.name == 'Real Name'

def test_register_unknown_tutor_id(client):
    response = client.post('/register', json={
        'adm_no': 3005,
        'name': 'No Tutor',
        'dept': 'CSE',
        'sem': 1,
        'phone': '9876543210',
        'email': 'notutor@college.edu',
        'password': STUDENT_PASSWORD,
        'tutor_id': 999,
    })
    assert response.status_code == 400
    assert 'Unknown tutor' in response.get_json()['errors']

def test_student_login(client, student):
    response = client.post('/login', json={'adm_no': student['adm_no'], 'password': STUDENT_PASSWORD})
    assert response.status_code == 200
    data = response.get_json()['data']
    assert 'access_token' in data
    assert data['student']['adm_no'] == student['adm_no']
    assert 'password_hash' not in data['student']

def test_student_login_invalid_credentials(client, student):
    response = client.post('/login', json={'adm_no': student['adm_no'], 'password': 'wrongpassword'})
    assert response.status_code == 401

    response = client.post('/login', json={'adm_no': 99999, 'password': STUDENT_PASSWORD})
    assert response.status_code == 401

def test_student_login_missing_fields(client):
    response = client.post('/login', json={'adm_no': 2001})
    assert response.status_code == 400

def test_placeholder_cannot_login(client, app):
    placeholder = Student(kind=StudentKind.PLACEHOLDER, adm_no=3006, name='Ghost', dept='')
    placeholder.save()

    response = client.post('/login', json={'adm_no': 3006, 'password': ''})
    assert response.status_code == 400
    response = client.post('/login', json={'adm_no': 3006, 'password': 'anything'})
    assert response.status_code == 401

def test_tutor_registration_requires_approval(client, admin_token):
    response = client.post('/tutor/register', json={
        'emp_id': 'T200',
        'name': 'New Tutor',
        'dept': 'ECE',
        'email': 'new.tutor@college.edu',
        'password': 'tutor123',
    })
    assert response.status_code == 200
    tutor_id = response.get_json()['data']['tutor_id']

    response = client.post('/tutor/login', json={'emp_id': 'T200', 'password': 'tutor123'})
    assert response.status_code == 403
    assert 'pending admin approval' in response.get_json()['message']

    response = client.put(f'/admin/tutors/{tutor_id}/verify', headers=auth_header(admin_token))
    assert response.status_code == 200
    assert Tutor.get_by_id(tutor_id).verified is True

    response = client.post('/tutor/login', json={'emp_id': 'T200', 'password': 'tutor123'})
    assert response.status_code == 200
    assert response.get_json()['data']['tutor']['emp_id'] == 'T200'

def test_tutor_registration_duplicate(client, tutor):
    response = client.post('/tutor/register', json={
        'emp_id': tutor.emp_id,
        'name': 'Copy Cat',
        'dept': 'CSE',
        'email': 'copy@college.edu',
        'password': 'tutor123',
    })
    assert response.status_code == 409

def test_tutor_login_invalid_credentials(client, tutor):
    response = client.post('/tutor/login', json={'emp_id': tutor.emp_id, 'password': 'nope'})
    assert response.status_code == 401

def test_admin_login(client):
    response = client.post('/admin/login', json={'username': 'admin', 'password': 'wrong'})
    assert response.status_code == 401

    response = client.post('/admin/login', json={'username': 'admin', 'password': 'admin-test-pass'})
    assert response.status_code == 200
    assert 'access_token' in response.get_json()['data']

def test_protected_route_requires_token(client, student):
    response = client.get(f"/student/{student['id']}")
    assert response.status_code == 401
    assert response.get_json()['message'] == 'Authorization token required'

def test_student_cannot_read_other_student(client, tutor, student):
    other_id = register_student(client, 2002)

    response = client.get(f'/student/{other_id}', headers=auth_header(student['token']))
    assert response.status_code == 403

    response = client.get(f"/student/{student['id']}", headers=auth_header(student['token']))
    assert response.status_code == 200
    assert response.get_json()['data']['adm_no'] == 2001

def test_unapproved_tutor_token_rejected(client, app):
    tutor = make_tutor(emp_id='T300', name='Pending Tutor', approved=True)
    token = client.post('/tutor/login', json={'emp_id': 'T300', 'password': 'tutor123'}).get_json()['data']['access_token']
    tutor.verified = False
    tutor.save()

    response = client.get(f'/tutor/{tutor.id}', headers=auth_header(token))
    assert response.status_code == 403

def test_student_photo_not_found(client, student):
    response = client.get(f"/student/{student['id']}/photo", headers=auth_header(student['token']))
    assert response.status_code == 404
    assert response.get_json()['message'] == 'Image not found'

def test_login_token_identifies_student(client, student):
    token = login_student(client, student['adm_no'])
    response = client.get(f"/student/{student['id']}", headers=auth_header(token))
    assert response.status_code == 200
