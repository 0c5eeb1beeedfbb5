from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Roles carried by the admin request context."""

    ADMIN = "admin"
    HR = "hr"
    MANAGER = "manager"
    EMPLOYEE = "employee"


class PunchType(str, Enum):
    ENTRY = "entry"
    EXIT = "exit"
    BREAK_START = "break_start"
    BREAK_END = "break_end"


class PunchStatus(str, Enum):
    OK = "ok"
    SUSPICIOUS = "suspicious"
    ADJUSTED = "adjusted"
    PENDING = "pending"


class TimesheetStatus(str, Enum):
    """Daily timesheet classification stored in the database."""

    PENDING = "pending"
    REVIEW = "review"
    OK = "ok"
    ADJUSTED = "adjusted"
    ABSENCE = "absence"


class LedgerSource(str, Enum):
    AUTOMATIC = "automatic"
    MANUAL_ADJUSTMENT = "manual_adjustment"
    EXCUSED_ABSENCE = "excused_absence"
    MEDICAL_CERTIFICATE = "medical_certificate"
    COMPENSATION = "compensation"


class ApprovalStatus(str, Enum):
    APPROVED = "approved"
    PENDING = "pending"
    REJECTED = "rejected"


class ScheduleOrigin(str, Enum):
    """Where a resolved work schedule came from."""

    EMPLOYEE = "employee"
    SECTOR = "sector"
    DEFAULT = "default"
