"""Shared fixtures for the API tests."""
import pytest
from gatepass import create_app, db
from gatepass.models.tutor import Tutor

STUDENT_PASSWORD = 'student123'
TUTOR_PASSWORD = 'tutor123'

@pytest.fixture
def app():
    """Create test app."""
    app = create_app('testing')
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()

@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()

def auth_header(token):
    return {'Authorization': f'Bearer {token}'}

def make_tutor(emp_id='T100', name='Anita Raman', approved=True):
    """Tutor created directly in the database."""
    tutor = Tutor(emp_id=emp_id, name=name, dept='CSE', email=f'{emp_id.lower()}@college.edu')
    tutor.set_password(TUTOR_PASSWORD)
    if approved:
        tutor.approve()
    return tutor.save()

def register_student(client, adm_no, tutor_name='Anita Raman', **overrides):
    """Register a student through the API and return the new id."""
    payload = {
        'adm_no': adm_no,
        'name': f'Student {adm_no}',
        'dept': 'CSE',
        'sem': 4,
        'phone': '9876543210',
        'email': f'student{adm_no}@college.edu',
        'password': STUDENT_PASSWORD,
        'tutor_name': tutor_name,
    }
    payload.update(overrides)
    response = client.post('/register', json=payload)
    assert response.status_code == 201, response.get_json()
    return response.get_json()['data']['student_id']

def login_student(client, adm_no):
    response = client.post('/login', json={'adm_no': adm_no, 'password': STUDENT_PASSWORD})
    assert response.status_code == 200, response.get_json()
    return response.get_json()['data']['access_token']

def login_tutor(client, emp_id='T100'):
    response = client.post('/tutor/login', json={'emp_id': emp_id, 'password': TUTOR_PASSWORD})
    assert response.status_code == 200, response.get_json()
    return response.get_json()['data']['access_token']

def login_admin(client):
    response = client.post('/admin/login', json={'username': 'admin', 'password': 'admin-test-pass'})
    assert response.status_code == 200, response.get_json()
    return response.get_json()['data']['access_token']

def submit_pass(client, student_id, token, **overrides):
    """Submit a gate pass and return the response body."""
    payload = {
        'purpose': 'Medical appointment',
        'date': '2024-05-10T09:30:00',
        'return_time': '17:00',
        'group_members': [],
    }
    payload.update(overrides)
    response = client.post(f'/form-fill/{student_id}', json=payload, headers=auth_header(token))
    assert response.status_code == 200, response.get_json()
    return response.get_json()['data']

@pytest.fixture
def tutor(app):
    return make_tutor()

@pytest.fixture
def tutor_token(client, tutor):
    return login_tutor(client)

@pytest.fixture
def admin_token(client):
    return login_admin(client)

@pytest.fixture
def student(client, tutor):
    """A registered student on ``tutor``'s roster with a login token."""
    student_id = register_student(client, 2001)
    return {'id': student_id, 'adm_no': 2001, 'token': login_student(client, 2001)}
