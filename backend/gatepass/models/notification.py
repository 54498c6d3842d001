"""Stored acknowledgements for the derived tutor notification feed."""
from datetime import datetime
from gatepass import db

class NotificationAck(db.Model):
    """A tutor has read the notification with this id."""

    __tablename__ = 'notification_acks'
    __table_args__ = (
        db.UniqueConstraint('tutor_id', 'notification_id', name='uq_notification_ack'),
    )

    id = db.Column(db.Integer, primary_key=True)
    tutor_id = db.Column(db.Integer, nullable=False, index=True)
    notification_id = db.Column(db.String(64), nullable=False)
    read_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    def __repr__(self) -> str:
        return f'<NotificationAck {self.tutor_id}:{self.notification_id}>'
