from flask import Blueprint
import logging

from database import db_manager


queries_bp = Blueprint('queries', __name__)

logger = logging.getLogger(__name__)

from . import (
    create_query,
    get_queries,
    resolve_query,
)

__all__ = ['queries_bp']
