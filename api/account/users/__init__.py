from flask import Blueprint
import logging

from database import db_manager


users_bp = Blueprint('users', __name__)

logger = logging.getLogger(__name__)

from . import (
    profile,
    dashboard,
    certificate,
)

__all__ = ['users_bp']
