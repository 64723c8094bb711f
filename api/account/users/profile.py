from flask import request, jsonify, g

from utils.decorators import login_required, log_action, handle_storage_errors
from user_manager import user_manager

from . import users_bp, logger


@users_bp.route('/profile', methods=['GET', 'PUT'])
@login_required
@log_action('个人资料')
@handle_storage_errors
def api_profile():
    user = g.current_user

    if request.method == 'GET':
        return jsonify({
            'success': True,
            'user': user.to_dict(),
        })

    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        return jsonify({'success': False, 'message': 'Request body must be a JSON object'}), 400
    if 'email' in data and data['email'] != user.email:
        logger.warning(f"用户 {user.email} 尝试修改邮箱")
        return jsonify({'success': False, 'message': 'Email cannot be changed'}), 400

    updated, message = user_manager.update_profile(user, data)
    if updated is None:
        return jsonify({'success': False, 'message': message}), 400

    return jsonify({
        'success': True,
        'message': message,
        'user': updated.to_dict(),
    })
