from flask import request, jsonify

from utils.decorators import validate_json, log_action, handle_storage_errors
from user_manager import user_manager

from . import auth_bp, logger


@auth_bp.route('/signup', methods=['POST'])
@validate_json()
@log_action('用户注册')
@handle_storage_errors
def signup():
    """用户注册，成功后直接登录"""
    data = request.get_json()

    user, token, message = user_manager.register_user(data)
    if user is None:
        logger.warning(f"注册失败: {data.get('email')} - {message}")
        status = 409 if 'already exists' in message else 400
        return jsonify({
            'success': False,
            'message': message
        }), status

    return jsonify({
        'success': True,
        'message': message,
        'token': token,
        'user': user.to_dict(),
    }), 201
