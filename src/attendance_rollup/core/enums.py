from __future__ import annotations

from enum import Enum
from typing import Optional


class AttendanceStatus(str, Enum):
    """Resolved status of one employee on one date."""

    PRESENT = "Present"
    LATE = "Late"
    LEAVE = "Leave"
    PERMISSION = "Permission"
    ABSENT = "Absent"

    @classmethod
    def parse(cls, value: object) -> Optional["AttendanceStatus"]:
        text = str(value or "").strip().lower()
        for member in cls:
            if member.value.lower() == text:
                return member
        return None


class RequestStatus(str, Enum):
    """Approval state of leave/permission/overtime records."""

    APPROVED = "Approved"
    PENDING = "Pending"
    REJECTED = "Rejected"

    @classmethod
    def parse(cls, value: object) -> "RequestStatus":
        text = str(value or "").strip().lower()
        if text in {"approved", "approve"}:
            return cls.APPROVED
        if text.startswith("reject"):
            return cls.REJECTED
        # "Pending Team Lead", "Pending Manager Approval", unknown values...
        return cls.PENDING


class RecordKind(str, Enum):
    WORK_LOG = "work_log"
    LEAVE = "leave"
    PERMISSION = "permission"
    OVERTIME = "overtime"
