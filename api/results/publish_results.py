from flask import request, jsonify

from models import EventResult
from utils.decorators import admin_required, validate_json, log_action, handle_storage_errors
from utils.event_catalog import get_event_details

from . import results_bp, db_manager, logger


@results_bp.route('/publish', methods=['POST'])
@admin_required
@validate_json(['eventType', 'season'])
@log_action('发布成绩')
@handle_storage_errors
def publish_results():
    """发布成绩单；同一赛事同一赛季重复发布会追加新的一份"""
    data = request.get_json()

    if get_event_details(data['eventType']) is None:
        return jsonify({'success': False, 'message': 'Please select a valid event'}), 400

    try:
        result = EventResult.from_dict(data)
    except (KeyError, TypeError, ValueError) as e:
        logger.warning(f"成绩单格式错误: {e}")
        return jsonify({'success': False, 'message': f'Invalid result data: {e}'}), 400

    db_manager.publish_event_result(result)

    return jsonify({
        'success': True,
        'message': 'Results published successfully!',
        'data': result.to_dict(),
    }), 201
