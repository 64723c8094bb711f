from flask import jsonify, g

from utils.decorators import login_required, log_action, handle_storage_errors
from user_manager import user_manager

from . import auth_bp, logger


@auth_bp.route('/logout', methods=['POST'])
@login_required
@log_action('用户登出')
@handle_storage_errors
def logout():
    user_manager.logout()
    logger.info(f"用户 {g.current_user.email} 已登出")
    return jsonify({'success': True, 'message': 'Logged out'})
