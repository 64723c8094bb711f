from flask import request, jsonify

from utils.decorators import admin_required, log_action, handle_storage_errors

from . import registrations_bp, db_manager


@registrations_bp.route('', methods=['GET'])
@admin_required
@log_action('获取报名列表')
@handle_storage_errors
def get_registrations():
    """报名记录列表，可按 eventType 筛选"""
    event_type = request.args.get('eventType', '').strip() or None
    participants = db_manager.get_participants(event_type)
    return jsonify({
        'success': True,
        'data': [p.to_dict() for p in participants],
        'total': len(participants),
    })
