from flask import request, jsonify

from utils.decorators import log_action, handle_storage_errors
from utils.event_catalog import get_event_title

from . import results_bp, db_manager


@results_bp.route('', methods=['GET'])
@log_action('获取成绩列表')
@handle_storage_errors
def get_results():
    """已发布成绩列表，可按 eventType / season 筛选"""
    event_type = request.args.get('eventType', '').strip()
    season = request.args.get('season', '').strip()

    results = [r for r in db_manager.get_event_results() if r.is_published]
    if event_type:
        results = [r for r in results if r.event_type == event_type]
    if season:
        results = [r for r in results if r.season == season]

    data = []
    for result in results:
        item = result.to_dict()
        item['eventName'] = get_event_title(result.event_type)
        data.append(item)

    return jsonify({
        'success': True,
        'data': data,
        'total': len(data),
    })
