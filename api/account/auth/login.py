from flask import request, jsonify

from utils.decorators import validate_json, log_action, handle_storage_errors
from user_manager import user_manager

from . import auth_bp


@auth_bp.route('/login', methods=['POST'])
@validate_json(['email', 'password'])
@log_action('用户登录')
@handle_storage_errors
def login():
    """用户登录"""
    data = request.get_json()

    user, token, message = user_manager.login(data['email'], data['password'])
    if user is None:
        return jsonify({
            'success': False,
            'message': message
        }), 401

    return jsonify({
        'success': True,
        'message': message,
        'token': token,
        'user': user.to_dict(),
    })
