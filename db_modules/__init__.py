"""Storage domain mixins package."""

from .db_users import UserDbMixin
from .db_participants import ParticipantDbMixin
from .db_submissions import SubmissionDbMixin
from .db_results import ResultDbMixin
from .db_queries import QueryDbMixin
from .db_payments import PaymentDbMixin

__all__ = [
    "UserDbMixin",
    "ParticipantDbMixin",
    "SubmissionDbMixin",
    "ResultDbMixin",
    "QueryDbMixin",
    "PaymentDbMixin",
]
