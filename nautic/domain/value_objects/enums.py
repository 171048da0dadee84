"""Domain enums — pure Python, no external dependencies."""

from enum import Enum


class Profile(str, Enum):
    PLEASURE_BOATER = "pleasure_boater"
    BOAT_MANAGER = "boat_manager"
    NAUTICAL_COMPANY = "nautical_company"
    CORPORATE = "corporate"


class RequestStatus(str, Enum):
    SUBMITTED = "submitted"
    QUOTE_SENT = "quote_sent"
    QUOTE_ACCEPTED = "quote_accepted"
    SCHEDULED = "scheduled"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    READY_TO_BILL = "ready_to_bill"
    TO_PAY = "to_pay"
    PAID = "paid"
    CANCELLED = "cancelled"
    FORWARDED = "forwarded"


class Urgency(str, Enum):
    NORMAL = "normal"
    URGENT = "urgent"
