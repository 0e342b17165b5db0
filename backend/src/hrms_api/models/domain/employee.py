"""Employee domain enums."""

from enum import StrEnum


class EmploymentStatus(StrEnum):
    """Employment status enum."""

    ACTIVE = "active"
    PROBATION = "probation"
    NOTICE_PERIOD = "notice_period"
    ON_LEAVE = "on_leave"
    SUSPENDED = "suspended"
    TERMINATED = "terminated"
    RESIGNED = "resigned"


class EmploymentType(StrEnum):
    """Employment type enum."""

    FULL_TIME = "full_time"
    PART_TIME = "part_time"
    CONTRACT = "contract"
    INTERN = "intern"
    CONSULTANT = "consultant"
    TEMPORARY = "temporary"
