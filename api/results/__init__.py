from flask import Blueprint
import logging

from database import db_manager


results_bp = Blueprint('results', __name__)

logger = logging.getLogger(__name__)

XLSX_MIMETYPE = 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'

from . import (
    get_results,
    search_results,
    import_results,
    publish_results,
    download_template,
    export_results,
)

__all__ = ['results_bp']
