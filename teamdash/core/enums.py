# teamdash/core/enums.py
# Domain enums shared by the ORM models, schemas and services.
import enum
from typing import Optional, Type, TypeVar

E = TypeVar("E", bound=enum.Enum)


class Role(str, enum.Enum):
    MANAGER = "MANAGER"
    EMPLOYEE = "EMPLOYEE"


class TaskStatus(str, enum.Enum):
    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"


class Priority(str, enum.Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class ProjectStatus(str, enum.Enum):
    PLANNING = "PLANNING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    ON_HOLD = "ON_HOLD"


class ProjectMemberRole(str, enum.Enum):
    OWNER = "OWNER"
    MANAGER = "MANAGER"
    MEMBER = "MEMBER"


class GroupType(str, enum.Enum):
    PROJECT_TEAM = "PROJECT_TEAM"
    GENERAL = "GENERAL"


class LeaveStatus(str, enum.Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    CANCELLED = "CANCELLED"


class LeaveType(str, enum.Enum):
    SICK_LEAVE = "SICK_LEAVE"
    CASUAL_LEAVE = "CASUAL_LEAVE"
    ANNUAL_LEAVE = "ANNUAL_LEAVE"
    UNPAID_LEAVE = "UNPAID_LEAVE"


class AttendanceStatus(str, enum.Enum):
    PRESENT = "PRESENT"
    ABSENT = "ABSENT"
    LATE = "LATE"
    HALF_DAY = "HALF_DAY"
    WORK_FROM_HOME = "WORK_FROM_HOME"
    ON_LEAVE = "ON_LEAVE"


def parse_enum_or_default(enum_cls: Type[E], raw, default: Optional[E]) -> Optional[E]:
    """
    Lenient enum parsing for request fields.

    Accepts an enum member or its name in any case. Missing, blank or
    unknown values return ``default`` instead of raising. Callers pass
    ``default=None`` when an unknown value means "leave the field alone".
    """
    if raw is None:
        return default
    if isinstance(raw, enum_cls):
        return raw
    name = str(raw).strip().upper()
    if not name:
        return default
    try:
        return enum_cls[name]
    except KeyError:
        return default


def enum_values(enum_cls: Type[enum.Enum]) -> str:
    """Render enum values for a SQL ``IN (...)`` check constraint."""
    return ", ".join(f"'{member.value}'" for member in enum_cls)
