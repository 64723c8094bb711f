from flask import Blueprint
import logging

from database import db_manager


submissions_bp = Blueprint('submissions', __name__)

logger = logging.getLogger(__name__)

from . import (
    create_submission,
    get_user_submissions,
    update_submission_status,
)

__all__ = ['submissions_bp']
