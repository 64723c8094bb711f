from flask import Blueprint
import logging


auth_bp = Blueprint('auth', __name__)

logger = logging.getLogger(__name__)

from . import (
    signup,
    login,
    logout,
)

__all__ = ['auth_bp']
