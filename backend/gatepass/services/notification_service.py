"""Tutor notification feed.

Notifications are not stored: the feed is recomputed on every request
from the tutor's pending passes and unverified registrations. Only the
fact that a tutor has read a notification is persisted.
"""
from typing import Dict, List, Set
from flask import current_app
from gatepass import db
from gatepass.models.gate_pass import GatePassStatus
from gatepass.models.notification import NotificationAck
from gatepass.models.student import Student, StudentKind
from gatepass.models.tutor import Tutor
from gatepass.services.tutor_service import TutorService
from gatepass.utils.exceptions import NotFoundError, ValidationFailedError

GATEPASS = 'gatepass'
REGISTRATION = 'registration'

class NotificationService:

    @staticmethod
    def _read_ids(tutor: Tutor) -> Set[str]:
        rows = NotificationAck.query.filter_by(tutor_id=tutor.id).all()
        return {row.notification_id for row in rows}

    @staticmethod
    def build_notifications(tutor: Tutor) -> List[Dict]:
        """Every current notification for the tutor, newest first."""
        source_limit = current_app.config.get('NOTIFICATION_SOURCE_LIMIT', 10)
        read_ids = NotificationService._read_ids(tutor)
        notifications = []

        for gate_pass in TutorService.roster_passes(tutor, GatePassStatus.PENDING, limit=source_limit):
            student = Student.get_by_id(gate_pass.student_id)
            notification_id = f'{GATEPASS}-{gate_pass.id}'
            notifications.append({
                'id': notification_id,
                'type': GATEPASS,
                'title': 'New Gate Pass Request',
                'message': f'{student.name} ({student.adm_no}) has submitted a gate pass request',
                'student_name': student.name,
                'student_adm_no': student.adm_no,
                'purpose': gate_pass.purpose,
                'date': gate_pass.created_at,
                'read': notification_id in read_ids,
                'priority': 'high'
            })

        pending_students = (
            Student.query
            .filter_by(tutor_id=tutor.id, verified=False, kind=StudentKind.REGISTERED)
            .order_by(Student.created_at.desc())
            .limit(source_limit)
            .all()
        )
        for student in pending_students:
            notification_id = f'{REGISTRATION}-{student.id}'
            notifications.append({
                'id': notification_id,
                'type': REGISTRATION,
                'title': 'New Student Registration',
                'message': f'{student.name} ({student.adm_no}) has registered and awaits your approval',
                'student_name': student.name,
                'student_adm_no': student.adm_no,
                'dept': student.dept,
                'date': student.created_at,
                'read': notification_id in read_ids,
                'priority': 'medium'
            })

        notifications.sort(key=lambda n: n['date'], reverse=True)
        for notification in notifications:
            notification['date'] = notification['date'].isoformat()
        return notifications

    @staticmethod
    def get_feed(tutor: Tutor) -> Dict:
        """Counts cover the whole feed; the list is truncated."""
        notifications = NotificationService.build_notifications(tutor)
        feed_limit = current_app.config.get('NOTIFICATION_FEED_LIMIT', 20)
        return {
            'count': len(notifications),
            'unread_count': len([n for n in notifications if not n['read']]),
            'notifications': notifications[:feed_limit]
        }

    @staticmethod
    def _acknowledge(tutor: Tutor, notification_ids) -> int:
        already_read = NotificationService._read_ids(tutor)
        added = 0
        for notification_id in notification_ids:
            if notification_id not in already_read:
                db.session.add(NotificationAck(tutor_id=tutor.id, notification_id=notification_id))
                already_read.add(notification_id)
                added += 1
        db.session.commit()
        return added

    @staticmethod
    def mark_read(tutor: Tutor, notification_id: str) -> None:
        kind, _, ref = notification_id.partition('-')
        if kind not in (GATEPASS, REGISTRATION) or not ref.isdigit():
            raise ValidationFailedError("Unknown notification id")

        current_ids = {n['id'] for n in NotificationService.build_notifications(tutor)}
        if notification_id not in current_ids:
            raise NotFoundError("Notification not found")
        NotificationService._acknowledge(tutor, [notification_id])

    @staticmethod
    def mark_all_read(tutor: Tutor) -> int:
        notifications = NotificationService.build_notifications(tutor)
        return NotificationService._acknowledge(tutor, [n['id'] for n in notifications])
