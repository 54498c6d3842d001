"""Test the tutor dashboard and notification feed."""
from datetime import datetime, timedelta
from gatepass import db
from gatepass.models.notification import NotificationAck
from gatepass.models.student import Student, StudentKind
from conftest import auth_header, make_tutor, login_tutor, register_student, submit_pass

def test_tutor_profile(client, tutor, tutor_token):
    response = client.get(f'/tutor/{tutor.id}', headers=auth_header(tutor_token))
    assert response.status_code == 200
    data = response.get_json()['data']
    assert data['emp_id'] == 'T100'
    assert data['status'] == 'approved'
    assert 'password_hash' not in data

def test_tutor_cannot_access_other_tutor(client, tutor, tutor_token):
    other = make_tutor(emp_id='T101', name='Joseph Mathew')
    response = client.get(f'/tutor/{other.id}/students', headers=auth_header(tutor_token))
    assert response.status_code == 403

def test_admin_can_view_tutor_roster(client, tutor, admin_token, student):
    response = client.get(f'/tutor/{tutor.id}/students', headers=auth_header(admin_token))
    assert response.status_code == 200
    assert [s['adm_no'] for s in response.get_json()['data']] == [2001]

def test_roster_uses_tutor_reference(client, tutor, tutor_token, student):
    make_tutor(emp_id='T101', name='Joseph Mathew')
    register_student(client, 2002, tutor_name='Joseph Mathew')
    register_student(client, 2003, tutor_name='Somebody Unknown')

    response = client.get(f'/tutor/{tutor.id}/students', headers=auth_header(tutor_token))
    assert [s['adm_no'] for s in response.get_json()['data']] == [2001]

    # Unmatched names are kept for display without a tutor link
    orphan = Student.query.filter_by(adm_no=2003).first()
    assert orphan.tutor_id is None
    assert orphan.tutor_name == 'Somebody Unknown'

def test_pending_and_approved_passes(client, tutor, tutor_token, student):
    gate_pass = submit_pass(client, student['id'], student['token'])['gate_pass']
    headers = auth_header(tutor_token)

    pending = client.get(f'/tutor/{tutor.id}/pending-passes', headers=headers).get_json()['data']
    assert len(pending) == 1
    assert pending[0]['id'] == gate_pass['id']
    assert pending[0]['student_name'] == 'Student 2001'
    assert pending[0]['student_adm_no'] == 2001
    assert pending[0]['student_sem'] == 4

    client.post(f"/tutor/gatepass/{gate_pass['id']}/approve", json={'status': 'approved'}, headers=headers)

    assert client.get(f'/tutor/{tutor.id}/pending-passes', headers=headers).get_json()['data'] == []
    approved = client.get(f'/tutor/{tutor.id}/approved-passes', headers=headers).get_json()['data']
    assert [p['id'] for p in approved] == [gate_pass['id']]
    assert approved[0]['approved_at'] is not None

def test_approve_registration(client, tutor, tutor_token, student):
    response = client.post(
        f"/tutor/{tutor.id}/students/{student['id']}/approve",
        headers=auth_header(tutor_token)
    )
    assert response.status_code == 200
    assert response.get_json()['data']['verified'] is True

def test_approve_registration_outside_roster(client, tutor, tutor_token):
    make_tutor(emp_id='T101', name='Joseph Mathew')
    other_id = register_student(client, 2002, tutor_name='Joseph Mathew')

    response = client.post(f'/tutor/{tutor.id}/students/{other_id}/approve', headers=auth_header(tutor_token))
    assert response.status_code == 404
    assert Student.get_by_id(other_id).verified is False

def test_notification_feed(client, tutor, tutor_token, student):
    gate_pass = submit_pass(client, student['id'], student['token'])['gate_pass']

    response = client.get(f'/tutor/{tutor.id}/notifications', headers=auth_header(tutor_token))
    assert response.status_code == 200
    feed = response.get_json()['data']

    assert feed['count'] == 2
    assert feed['unread_count'] == 2
    ids = [n['id'] for n in feed['notifications']]
    # Pass was submitted after the registration, so it comes first
    assert ids == [f"gatepass-{gate_pass['id']}", f"registration-{student['id']}"]
    assert feed['notifications'][0]['priority'] == 'high'
    assert feed['notifications'][1]['type'] == 'registration'

def test_notification_feed_drops_resolved_items(client, tutor, tutor_token, student):
    gate_pass = submit_pass(client, student['id'], student['token'])['gate_pass']
    headers = auth_header(tutor_token)

    client.post(f"/tutor/gatepass/{gate_pass['id']}/approve", json={'status': 'rejected'}, headers=headers)
    client.post(f"/tutor/{tutor.id}/students/{student['id']}/approve", headers=headers)

    feed = client.get(f'/tutor/{tutor.id}/notifications', headers=headers).get_json()['data']
    assert feed['count'] == 0
    assert feed['notifications'] == []

def test_notification_feed_ignores_placeholders(client, tutor, tutor_token, student):
    submit_pass(client, student['id'], student['token'], group_members=[{'name': 'Walk In', 'adm_no': 2099}])

    feed = client.get(f'/tutor/{tutor.id}/notifications', headers=auth_header(tutor_token)).get_json()['data']
    assert all(n['student_adm_no'] != 2099 for n in feed['notifications'])

def test_mark_notification_read(client, tutor, tutor_token, student):
    gate_pass = submit_pass(client, student['id'], student['token'])['gate_pass']
    headers = auth_header(tutor_token)
    notification_id = f"gatepass-{gate_pass['id']}"

    response = client.post(f'/tutor/{tutor.id}/notifications/{notification_id}/read', headers=headers)
    assert response.status_code == 200

    feed = client.get(f'/tutor/{tutor.id}/notifications', headers=headers).get_json()['data']
    assert feed['unread_count'] == 1
    read = {n['id']: n['read'] for n in feed['notifications']}
    assert read[notification_id] is True

    # Marking again does not store a second acknowledgement
    client.post(f'/tutor/{tutor.id}/notifications/{notification_id}/read', headers=headers)
    assert NotificationAck.query.filter_by(tutor_id=tutor.id).count() == 1

def test_mark_all_notifications_read(client, tutor, tutor_token, student):
    submit_pass(client, student['id'], student['token'])
    headers = auth_header(tutor_token)

    response = client.post(f'/tutor/{tutor.id}/notifications/read-all', headers=headers)
    assert response.status_code == 200
    assert response.get_json()['data']['marked'] == 2

    feed = client.get(f'/tutor/{tutor.id}/notifications', headers=headers).get_json()['data']
    assert feed['count'] == 2
    assert feed['unread_count'] == 0

def test_mark_unknown_notification(client, tutor, tutor_token):
    response = client.post(f'/tutor/{tutor.id}/notifications/banana-1/read', headers=auth_header(tutor_token))
    assert response.status_code == 400

def test_notification_feed_is_per_tutor(client, tutor, student):
    other = make_tutor(emp_id='T101', name='Joseph Mathew')
    token = login_tutor(client, 'T101')

    feed = client.get(f'/tutor/{other.id}/notifications', headers=auth_header(token)).get_json()['data']
    assert feed['count'] == 0

def test_mark_notification_outside_feed(client, tutor, tutor_token, student):
    response = client.post(f'/tutor/{tutor.id}/notifications/gatepass-999/read', headers=auth_header(tutor_token))
    assert response.status_code == 404
    assert NotificationAck.query.count() == 0

def test_mark_other_tutors_notification(client, tutor, student):
    gate_pass = submit_pass(client, student['id'], student['token'])['gate_pass']
    other = make_tutor(emp_id='T101', name='Joseph Mathew')
    token = login_tutor(client, 'T101')

    response = client.post(
        f"/tutor/{other.id}/notifications/gatepass-{gate_pass['id']}/read",
        headers=auth_header(token)
    )
    assert response.status_code == 404
    assert NotificationAck.query.count() == 0

def test_notification_feed_limits(app, client, tutor, tutor_token, student):
    # Twelve older unverified registrations, oldest first
    start = datetime.utcnow() - timedelta(days=1)
    for offset in range(12):
        db.session.add(Student(
            kind=StudentKind.REGISTERED,
            adm_no=5000 + offset,
            name=f'Waiting {offset}',
            dept='CSE',
            tutor_id=tutor.id,
            created_at=start + timedelta(minutes=offset)
        ))
    db.session.commit()

    passes = [
        submit_pass(client, student['id'], student['token'], purpose=f'Trip {n}')['gate_pass']
        for n in range(12)
    ]

    app.config['NOTIFICATION_FEED_LIMIT'] = 15
    headers = auth_header(tutor_token)
    client.post(f"/tutor/{tutor.id}/notifications/gatepass-{passes[-1]['id']}/read", headers=headers)

    feed = client.get(f'/tutor/{tutor.id}/notifications', headers=headers).get_json()['data']

    # Ten from each source, counted before the list is cut
    assert feed['count'] == 20
    assert feed['unread_count'] == 19
    assert len(feed['notifications']) == 15

    notifications = feed['notifications']
    dates = [n['date'] for n in notifications]
    assert dates == sorted(dates, reverse=True)

    # Newest ten passes first; the two oldest passes are not in the feed
    assert [n['id'] for n in notifications[:10]] == [f"gatepass-{p['id']}" for p in reversed(passes[2:])]
    assert notifications[0]['read'] is True

    # Then the newest registrations, starting with the fixture student
    assert notifications[10]['id'] == f"registration-{student['id']}"
    assert [n['student_adm_no'] for n in notifications[11:]] == [5011, 5010, 5009, 5008]

def test_notification_feed_default_limit(client, tutor, tutor_token, student):
    start = datetime.utcnow() - timedelta(days=1)
    for offset in range(12):
        db.session.add(Student(
            kind=StudentKind.REGISTERED,
            adm_no=5000 + offset,
            name=f'Waiting {offset}',
            dept='CSE',
            tutor_id=tutor.id,
            created_at=start + timedelta(minutes=offset)
        ))
    db.session.commit()
    for n in range(12):
        submit_pass(client, student['id'], student['token'], purpose=f'Trip {n}')

    feed = client.get(f'/tutor/{tutor.id}/notifications', headers=auth_header(tutor_token)).get_json()['data']

    assert feed['count'] == 20
    assert len(feed['notifications']) == 20
    types = [n['type'] for n in feed['notifications']]
    assert types.count('gatepass') == 10
    assert types.count('registration') == 10
