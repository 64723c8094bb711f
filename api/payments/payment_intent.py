from flask import jsonify

from utils.decorators import login_required, log_action, handle_storage_errors

from . import payments_bp, db_manager


@payments_bp.route('/intent', methods=['GET'])
@login_required
@log_action('获取支付意向')
@handle_storage_errors
def get_payment_intent():
    """登录后恢复未完成的支付"""
    intent = db_manager.get_payment_intent()
    return jsonify({
        'success': True,
        'data': intent.to_dict() if intent else None,
    })
