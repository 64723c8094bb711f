from flask import request, jsonify

from models import SubmissionStatus
from utils.decorators import admin_required, validate_json, log_action, handle_storage_errors

from . import submissions_bp, db_manager, logger


@submissions_bp.route('/<submission_id>/status', methods=['PUT'])
@admin_required
@validate_json(['status'])
@log_action('更新作品状态')
@handle_storage_errors
def update_submission_status(submission_id):
    data = request.get_json()

    try:
        status = SubmissionStatus(data['status'])
    except ValueError:
        valid = ', '.join(s.value for s in SubmissionStatus)
        return jsonify({'success': False, 'message': f'Invalid status, expected one of: {valid}'}), 400

    submission = db_manager.update_submission_status(submission_id, status, data.get('result'))
    if submission is None:
        return jsonify({'success': False, 'message': 'Submission not found'}), 404

    logger.info(f"作品 {submission_id} 状态更新为 {status.value}")
    return jsonify({
        'success': True,
        'data': submission.to_dict(),
    })
