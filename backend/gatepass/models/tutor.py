"""Tutor model."""
import enum
from werkzeug.security import generate_password_hash, check_password_hash
from gatepass import db
from gatepass.models.base import BaseModel, PhotoMixin

class TutorStatus(enum.Enum):
    """Administrator approval state."""
    PENDING = 'pending'
    APPROVED = 'approved'

class Tutor(PhotoMixin, BaseModel):
    """Tutor account; approves gate passes for the students it tutors."""

    __tablename__ = 'tutors'

    emp_id = db.Column(db.String(50), unique=True, nullable=False, index=True)
    name = db.Column(db.String(255), nullable=False)
    dept = db.Column(db.String(100), nullable=True)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)

    # Only an administrator flips these
    verified = db.Column(db.Boolean, default=False, nullable=False)
    status = db.Column(db.Enum(TutorStatus), nullable=False, default=TutorStatus.PENDING)

    def set_password(self, password: str) -> None:
        self.password_hash = generate_password_hash(password)

    def check_password(self, password: str) -> bool:
        return check_password_hash(self.password_hash, password)

    def approve(self) -> None:
        self.verified = True
        self.status = TutorStatus.APPROVED

    def to_dict(self, include_photo: bool = False) -> dict:
        result = super().to_dict(exclude=['password_hash', 'photo', 'photo_mimetype'])
        result['has_photo'] = self.photo is not None
        if include_photo:
            result['photo'] = self.photo_url
        return result

    def __repr__(self) -> str:
        return f'<Tutor {self.emp_id}>'
