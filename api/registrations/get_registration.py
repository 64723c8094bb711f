from flask import jsonify

from utils.decorators import admin_required, log_action, handle_storage_errors

from . import registrations_bp, db_manager


@registrations_bp.route('/<participant_id>', methods=['GET'])
@admin_required
@log_action('获取报名详情')
@handle_storage_errors
def get_registration(participant_id):
    participant = db_manager.get_participant_by_id(participant_id)
    if participant is None:
        return jsonify({'success': False, 'message': 'Registration not found'}), 404
    return jsonify({'success': True, 'data': participant.to_dict()})
