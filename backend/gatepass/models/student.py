"""Student directory model.

A student is either a registered account or a placeholder synthesized for a
group-pass member whose admission number was not on file. Placeholders carry
no credentials, contact details or tutor.

``group_id`` and ``tutor_id`` are weak references: plain ids with no
enforced integrity, so readers must tolerate ids that no longer resolve.
``purpose``, ``date`` and ``return_time`` mirror the current gate pass and
are only written through ``GatePassService``.
"""
import enum
from werkzeug.security import generate_password_hash, check_password_hash
from gatepass import db
from gatepass.models.base import BaseModel, PhotoMixin

class StudentKind(enum.Enum):
    """Student record variants."""
    REGISTERED = 'registered'
    PLACEHOLDER = 'placeholder'

class PassStatus(enum.Enum):
    """Status of the student's current gate pass."""
    NONE = 'none'
    PENDING = 'pending'
    APPROVED = 'approved'
    REJECTED = 'rejected'

class Student(PhotoMixin, BaseModel):
    """Student identity, credentials and current pass state."""

    __tablename__ = 'students'

    kind = db.Column(db.Enum(StudentKind), nullable=False, default=StudentKind.REGISTERED)

    # Identity
    adm_no = db.Column(db.Integer, unique=True, nullable=False, index=True)
    name = db.Column(db.String(255), nullable=False)
    dept = db.Column(db.String(100), nullable=True)
    sem = db.Column(db.Integer, nullable=True)

    # Tutor (weak reference, name kept for display)
    tutor_id = db.Column(db.Integer, nullable=True, index=True)
    tutor_name = db.Column(db.String(255), nullable=True)

    # Contact and credentials (registered students only)
    email = db.Column(db.String(255), unique=True, nullable=True, index=True)
    phone = db.Column(db.String(20), nullable=True)
    password_hash = db.Column(db.String(255), nullable=True)

    verified = db.Column(db.Boolean, default=False, nullable=False)

    # Current gate pass
    group_id = db.Column(db.Integer, nullable=True, index=True)
    pass_status = db.Column(db.Enum(PassStatus), nullable=False, default=PassStatus.NONE)
    purpose = db.Column(db.Text, nullable=True)
    date = db.Column(db.DateTime, nullable=True)
    return_time = db.Column(db.String(50), nullable=True)

    @property
    def is_placeholder(self) -> bool:
        return self.kind == StudentKind.PLACEHOLDER

    def set_password(self, password: str) -> None:
        """Set student password with hashing."""
        self.password_hash = generate_password_hash(password)

    def check_password(self, password: str) -> bool:
        """Placeholders never authenticate."""
        if self.is_placeholder or not self.password_hash:
            return False
        return check_password_hash(self.password_hash, password)

    def summary(self) -> dict:
        return {
            'id': self.id,
            'name': self.name,
            'adm_no': self.adm_no,
            'dept': self.dept,
            'sem': self.sem,
        }

    def to_dict(self, include_photo: bool = False) -> dict:
        """Convert to dictionary excluding sensitive data."""
        result = super().to_dict(exclude=['password_hash', 'photo', 'photo_mimetype'])
        result['has_photo'] = self.photo is not None
        if include_photo:
            result['photo'] = self.photo_url
        return result

    def __repr__(self) -> str:
        return f'<Student {self.adm_no}>'
