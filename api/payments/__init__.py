from flask import Blueprint
import logging

from database import db_manager


payments_bp = Blueprint('payments', __name__)

logger = logging.getLogger(__name__)

from . import (
    create_order,
    verify_payment,
    payment_intent,
)

__all__ = ['payments_bp']
