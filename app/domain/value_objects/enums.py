"""Domain enums — pure Python, no external dependencies."""

from enum import Enum


class TicketStatus(str, Enum):
    NEW = "new"
    ASSIGNED = "assigned"
    IN_PROGRESS = "in_progress"
    WAITING_CUSTOMER = "waiting_customer"
    WAITING_VENDOR = "waiting_vendor"
    RESOLVED = "resolved"
    CLOSED = "closed"
    CANCELLED = "cancelled"


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class TechnicianRole(str, Enum):
    TECHNICIAN = "technician"
    ADMIN = "admin"
    MANAGER = "manager"


class BreachType(str, Enum):
    RESPONSE = "response"
    RESOLUTION = "resolution"
    BOTH = "both"


class WorkType(str, Enum):
    SUPPORT = "support"
    PROJECT = "project"
    CONSULTING = "consulting"
    EMERGENCY = "emergency"


class ServiceLevel(str, Enum):
    L1 = "L1"
    L2 = "L2"
    L3 = "L3"
    PROJECT = "project"
    CONSULTING = "consulting"


class RateSource(str, Enum):
    """Which tier of the rate hierarchy produced a billing rate."""

    SPECIFIC = "specific"
    CONTRACT = "contract"
    USER_DEFAULT = "user_default"
