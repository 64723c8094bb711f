from flask import Blueprint
import logging

from database import db_manager


registrations_bp = Blueprint('registrations', __name__)

logger = logging.getLogger(__name__)

from . import (
    register_participant,
    get_registrations,
    get_registration,
)

__all__ = ['registrations_bp']
