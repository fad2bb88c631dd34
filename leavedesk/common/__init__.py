"""Common module — shared utilities for LeaveDesk."""

from leavedesk.common.audit import AuditTrail, create_audit_entry
from leavedesk.common.constants import (
    APPROVER_ROLES,
    BRADFORD_CONCERN_THRESHOLD,
    BRADFORD_MONITOR_THRESHOLD,
    MONTH_LABELS,
    SITE_WIDE_ROLES,
    UPCOMING_LEAVE_LIMIT,
    USER_ID_HEADER,
    BradfordBand,
    Decision,
    LeaveStatus,
    LeaveType,
    UserRole,
)
from leavedesk.common.exceptions import (
    AppException,
    ForbiddenException,
    InvalidRangeException,
    InvalidStateException,
    NotFoundException,
    StoreUnavailableException,
    ValidationException,
    register_exception_handlers,
)

__all__ = [
    # Audit
    "AuditTrail",
    "create_audit_entry",
    # Constants / Enums
    "BradfordBand",
    "Decision",
    "LeaveStatus",
    "LeaveType",
    "UserRole",
    "APPROVER_ROLES",
    "SITE_WIDE_ROLES",
    "BRADFORD_CONCERN_THRESHOLD",
    "BRADFORD_MONITOR_THRESHOLD",
    "MONTH_LABELS",
    "UPCOMING_LEAVE_LIMIT",
    "USER_ID_HEADER",
    # Exceptions
    "AppException",
    "ForbiddenException",
    "InvalidRangeException",
    "InvalidStateException",
    "NotFoundException",
    "StoreUnavailableException",
    "ValidationException",
    "register_exception_handlers",
]
