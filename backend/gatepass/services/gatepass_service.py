"""Gate pass lifecycle.

A pass is created ``pending`` for its primary student and every listed
group member, then resolved once to ``approved`` or ``rejected``. Each
student row carries a copy of its current pass (``group_id``,
``pass_status``, ``purpose``, ``date``, ``return_time``); the copy is
written only by :meth:`GatePassService.sync_pass_fields`, from both the
submit and the resolve paths, inside the same transaction as the pass.
"""
from dataclasses import dataclass, field, asdict
from datetime import datetime
from typing import Dict, List, Optional, Tuple, Union
from flask import current_app
from gatepass import db
from gatepass.models.gate_pass import GatePass, GatePassStatus, GroupMember
from gatepass.models.student import Student, StudentKind, PassStatus
from gatepass.services.student_service import StudentService
from gatepass.utils.exceptions import NotFoundError, ValidationFailedError, ConflictError
from gatepass.utils.helpers import parse_datetime
from gatepass.utils.validators import Validator

RESOLUTION_STATUSES = {GatePassStatus.APPROVED.value, GatePassStatus.REJECTED.value}

@dataclass
class MemberView:
    """One row of the verification view."""
    id: Union[int, str]
    name: str
    adm_no: Optional[int]
    dept: str
    sem: Optional[int]
    photo: Optional[str]
    verified: bool
    registered: bool

@dataclass
class VerificationView:
    """Everything the gate needs to check a pass, as plain data."""
    student_id: int
    pass_id: Optional[int]
    status: str
    purpose: str
    date: Optional[str]
    return_time: Optional[str]
    members: List[MemberView] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return asdict(self)

class GatePassService:
    """Creation, resolution and read models for gate passes."""

    @staticmethod
    def get_pass(pass_id: int) -> GatePass:
        gate_pass = GatePass.get_by_id(pass_id)
        if not gate_pass:
            raise NotFoundError("Gate pass not found")
        return gate_pass

    @staticmethod
    def sync_pass_fields(student: Student, gate_pass: GatePass, link: bool = True) -> None:
        """Mirror a pass onto a student record.

        Pending and approved passes copy purpose/date/return time; a rejected
        pass clears them.
        """
        if link:
            student.group_id = gate_pass.id
        student.pass_status = PassStatus(gate_pass.status.value)

        if gate_pass.status == GatePassStatus.REJECTED:
            student.purpose = None
            student.date = None
            student.return_time = None
        else:
            student.purpose = gate_pass.purpose
            student.date = gate_pass.date
            student.return_time = gate_pass.return_time

    @staticmethod
    def submit_pass(
        student_id: int,
        purpose: str,
        date,
        return_time: str = None,
        group_members: List[Dict] = None
    ) -> Tuple[GatePass, Student]:
        """Create a pending pass and put the primary student and every group member on it.

        Group members without a student record get a placeholder record.
        """
        student = StudentService.get_student(student_id)

        errors = []
        if not purpose or not str(purpose).strip():
            errors.append('purpose is required')
        pass_date = parse_datetime(date)
        if pass_date is None:
            errors.append('date must be an ISO-8601 date or datetime')
        errors.extend(Validator.validate_group_members(group_members))
        if errors:
            raise ValidationFailedError("Validation failed", errors=errors)

        gate_pass = GatePass(
            student_id=student.id,
            purpose=str(purpose).strip(),
            date=pass_date,
            return_time=str(return_time).strip() if return_time else None,
            status=GatePassStatus.PENDING
        )
        for position, member in enumerate(group_members or []):
            gate_pass.group_members.append(GroupMember(
                position=position,
                name=member.get('name'),
                adm_no=Validator.parse_int(member.get('adm_no')),
                admission_no=Validator.parse_int(member.get('admission_no')),
                dept=member.get('dept')
            ))

        try:
            db.session.add(gate_pass)
            db.session.flush()

            GatePassService.sync_pass_fields(student, gate_pass)

            for member in gate_pass.group_members:
                adm_no = member.admission_number
                if adm_no is None:
                    continue

                member_student = StudentService.find_by_adm_no(adm_no)
                if member_student is None:
                    member_student = Student(
                        kind=StudentKind.PLACEHOLDER,
                        name=member.name or 'Unknown',
                        adm_no=adm_no,
                        dept=member.dept or ''
                    )
                    db.session.add(member_student)
                    current_app.logger.info('Created placeholder student %s for gate pass', adm_no)

                GatePassService.sync_pass_fields(member_student, gate_pass)

            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

        current_app.logger.info(
            'Gate pass %s submitted by student %s with %d group members',
            gate_pass.id, student.adm_no, len(gate_pass.group_members)
        )
        return gate_pass, student

    @staticmethod
    def resolve_approval(pass_id: int, status: str, approver_id: int = None, force: bool = False) -> GatePass:
        """Approve or reject a pending pass and propagate the result.

        Every student linked through ``group_id`` is updated, and the
        primary student is updated again by id while it is still on this
        pass. Resolving a pass that is no longer pending is a conflict
        unless ``force`` is set.

        With an ``approver_id`` the pass must belong to a student on that
        tutor's roster. Without one (administrator override) an earlier
        approver is kept when the pass is approved again.
        """
        if status not in RESOLUTION_STATUSES:
            raise ValidationFailedError("Status must be 'approved' or 'rejected'")

        gate_pass = GatePassService.get_pass(pass_id)
        primary = Student.get_by_id(gate_pass.student_id) if gate_pass.student_id else None

        if approver_id is not None and (primary is None or primary.tutor_id != approver_id):
            raise NotFoundError("Gate pass not found in this tutor's roster")

        if not gate_pass.is_pending and not force:
            raise ConflictError(f"Gate pass is already {gate_pass.status.value}")

        try:
            gate_pass.status = GatePassStatus(status)
            if gate_pass.status == GatePassStatus.APPROVED:
                if approver_id is not None:
                    gate_pass.approved_by = approver_id
                gate_pass.approved_at = datetime.utcnow()
            else:
                gate_pass.approved_by = None
                gate_pass.approved_at = None

            for student in Student.query.filter_by(group_id=gate_pass.id).all():
                GatePassService.sync_pass_fields(student, gate_pass)

            # A primary student who moved on to a newer pass keeps that pass's fields
            if primary is not None and primary.group_id in (None, gate_pass.id):
                GatePassService.sync_pass_fields(primary, gate_pass, link=False)

            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

        current_app.logger.info('Gate pass %s %s by %s', gate_pass.id, status, approver_id or 'admin')
        return gate_pass

    @staticmethod
    def find_current_pass(student: Student) -> Optional[GatePass]:
        """The student's pass via ``group_id``, else the newest pass it submitted."""
        gate_pass = None
        if student.group_id:
            gate_pass = GatePass.get_by_id(student.group_id)
        if gate_pass is None:
            gate_pass = (
                GatePass.query
                .filter_by(student_id=student.id)
                .order_by(GatePass.created_at.desc(), GatePass.id.desc())
                .first()
            )
        return gate_pass

    @staticmethod
    def build_verification_view(student_id: int) -> VerificationView:
        """Member list and pass details shown at the gate for a student.

        Falls back to the student's own mirrored fields when no pass record
        can be found. The requested student is always listed first, then
        each group member in submission order.
        """
        student = StudentService.get_student(student_id)
        gate_pass = GatePassService.find_current_pass(student)

        if gate_pass is not None:
            view = VerificationView(
                student_id=student.id,
                pass_id=gate_pass.id,
                status=gate_pass.status.value,
                purpose=gate_pass.purpose or 'N/A',
                date=gate_pass.date.isoformat() if gate_pass.date else None,
                return_time=gate_pass.return_time
            )
            descriptors = gate_pass.group_members
        else:
            view = VerificationView(
                student_id=student.id,
                pass_id=None,
                status=student.pass_status.value,
                purpose=student.purpose or 'N/A',
                date=student.date.isoformat() if student.date else None,
                return_time=student.return_time
            )
            descriptors = []

        view.members.append(MemberView(
            id=student.id,
            name=student.name,
            adm_no=student.adm_no,
            dept=student.dept or '',
            sem=student.sem,
            photo=student.photo_url,
            verified=bool(student.verified),
            registered=not student.is_placeholder
        ))

        for descriptor in descriptors:
            adm_no = descriptor.admission_number
            record = StudentService.find_by_adm_no(adm_no) if adm_no is not None else None

            if record is not None:
                view.members.append(MemberView(
                    id=record.id,
                    name=descriptor.name or record.name or 'Unknown',
                    adm_no=adm_no,
                    dept=descriptor.dept or record.dept or '',
                    sem=record.sem,
                    photo=record.photo_url,
                    verified=bool(record.verified),
                    registered=not record.is_placeholder
                ))
            else:
                view.members.append(MemberView(
                    id=f"new-{adm_no if adm_no is not None else descriptor.name}",
                    name=descriptor.name or 'Unknown',
                    adm_no=adm_no,
                    dept=descriptor.dept or '',
                    sem=None,
                    photo=None,
                    verified=False,
                    registered=False
                ))

        return view

    @staticmethod
    def list_passes_for_student(student_id: int) -> List[GatePass]:
        """Passes the student submitted or is listed on, each once, newest first."""
        student = StudentService.get_student(student_id)

        matches = []
        matches.extend(GatePass.query.filter(GatePass.student_id == student.id).all())
        matches.extend(
            GatePass.query.join(GroupMember).filter(GroupMember.adm_no == student.adm_no).all()
        )
        matches.extend(
            GatePass.query.join(GroupMember).filter(GroupMember.admission_no == student.adm_no).all()
        )

        unique_passes = []
        seen_ids = set()
        for gate_pass in matches:
            key = str(gate_pass.id)
            if key not in seen_ids:
                seen_ids.add(key)
                unique_passes.append(gate_pass)

        unique_passes.sort(key=lambda p: (p.created_at, p.id), reverse=True)
        return unique_passes

    @staticmethod
    def list_all_passes() -> List[GatePass]:
        return GatePass.query.order_by(GatePass.date.desc(), GatePass.id.desc()).all()

    @staticmethod
    def serialize_pass(gate_pass: GatePass, include_tutor: bool = False) -> Dict:
        """Pass dictionary with a summary of its primary student, when it still exists."""
        student = Student.get_by_id(gate_pass.student_id) if gate_pass.student_id else None
        summary = None
        if student is not None:
            summary = student.summary()
            if include_tutor:
                summary['tutor_name'] = student.tutor_name
        return gate_pass.to_dict(student=summary)

    @staticmethod
    def delete_pass(pass_id: int) -> None:
        """Remove a pass; student rows keep their now-dangling ``group_id``."""
        gate_pass = GatePassService.get_pass(pass_id)
        gate_pass.delete()
        current_app.logger.info('Deleted gate pass %s', pass_id)
