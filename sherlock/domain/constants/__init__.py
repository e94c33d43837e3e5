"""Constants for domain model field names"""

from .identity_fields import IdentityFields
from .session_fields import SessionFields
from .event_fields import EventFields

__all__ = [
    "IdentityFields",
    "SessionFields",
    "EventFields",
]
