from flask import jsonify, g

from utils.decorators import login_required, log_action, handle_storage_errors

from . import submissions_bp, db_manager


@submissions_bp.route('/user', methods=['GET'])
@login_required
@log_action('获取我的作品')
@handle_storage_errors
def get_user_submissions():
    submissions = db_manager.get_submissions_for_user(g.current_user)
    return jsonify({
        'success': True,
        'data': [s.to_dict() for s in submissions],
        'total': len(submissions),
    })
