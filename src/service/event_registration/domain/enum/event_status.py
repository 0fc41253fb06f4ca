from enum import StrEnum


class EventStatus(StrEnum):
    """Publication status of an event. Has no bearing on seat accounting."""

    DRAFT = 'draft'
    PUBLISHED = 'published'
    CANCELLED = 'cancelled'
    COMPLETED = 'completed'
