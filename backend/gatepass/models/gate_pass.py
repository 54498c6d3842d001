"""Gate pass model with its embedded group-member descriptors."""
import enum
from typing import Optional
from gatepass import db
from gatepass.models.base import BaseModel

class GatePassStatus(enum.Enum):
    """Gate pass approval states; only PENDING can be resolved."""
    PENDING = 'pending'
    APPROVED = 'approved'
    REJECTED = 'rejected'

class GatePass(BaseModel):
    """A single exit request, possibly covering a group."""

    __tablename__ = 'gate_passes'

    # Weak references
    student_id = db.Column(db.Integer, nullable=True, index=True)
    approved_by = db.Column(db.Integer, nullable=True)

    purpose = db.Column(db.Text, nullable=False)
    date = db.Column(db.DateTime, nullable=False)
    return_time = db.Column(db.String(50), nullable=True)

    status = db.Column(db.Enum(GatePassStatus), nullable=False, default=GatePassStatus.PENDING, index=True)
    approved_at = db.Column(db.DateTime, nullable=True)

    group_members = db.relationship(
        'GroupMember',
        backref='gate_pass',
        order_by='GroupMember.position',
        cascade='all, delete-orphan',
        lazy='selectin'
    )

    @property
    def is_pending(self) -> bool:
        return self.status == GatePassStatus.PENDING

    def to_dict(self, student: Optional[dict] = None) -> dict:
        result = super().to_dict()
        result['group_members'] = [member.to_dict() for member in self.group_members]
        if student is not None:
            result['student'] = student
        return result

    def __repr__(self) -> str:
        return f'<GatePass {self.id} {self.status.value}>'

class GroupMember(db.Model):
    """Group member as submitted; not a link to a Student row.

    The admission number may arrive under either ``adm_no`` or
    ``admission_no``; both are kept as given.
    """

    __tablename__ = 'gate_pass_members'

    id = db.Column(db.Integer, primary_key=True)
    gate_pass_id = db.Column(db.Integer, db.ForeignKey('gate_passes.id', ondelete='CASCADE'), nullable=False, index=True)
    position = db.Column(db.Integer, nullable=False, default=0)

    name = db.Column(db.String(255), nullable=True)
    adm_no = db.Column(db.Integer, nullable=True, index=True)
    admission_no = db.Column(db.Integer, nullable=True, index=True)
    dept = db.Column(db.String(100), nullable=True)

    @property
    def admission_number(self) -> Optional[int]:
        return self.admission_no or self.adm_no

    def to_dict(self) -> dict:
        return {
            'name': self.name,
            'adm_no': self.adm_no,
            'admission_no': self.admission_no,
            'dept': self.dept,
        }
