"""Models package with all models."""
from .base import BaseModel
from .student import Student, StudentKind, PassStatus
from .tutor import Tutor, TutorStatus
from .gate_pass import GatePass, GatePassStatus, GroupMember
from .notification import NotificationAck

__all__ = [
    'BaseModel',
    'Student', 'StudentKind', 'PassStatus',
    'Tutor', 'TutorStatus',
    'GatePass', 'GatePassStatus', 'GroupMember',
    'NotificationAck'
]
