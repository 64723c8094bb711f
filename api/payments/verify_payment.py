from flask import request, jsonify, g

from utils.decorators import login_required, validate_json, log_action, handle_storage_errors
from utils.payment_gateway import get_payment_gateway
from user_manager import user_manager

from . import payments_bp, db_manager, logger


@payments_bp.route('/verify', methods=['POST'])
@login_required
@validate_json(['orderId', 'paymentId', 'signature'])
@log_action('校验支付')
@handle_storage_errors
def verify_payment():
    """校验支付签名，成功后标记参赛并分配参赛者编号"""
    data = request.get_json()
    gateway = get_payment_gateway()

    if not gateway.verify_signature(data['orderId'], data['paymentId'], data['signature']):
        logger.warning(f"支付签名校验失败: order={data['orderId']} payment={data['paymentId']}")
        return jsonify({'success': False, 'message': 'Payment verification failed'}), 400

    user = user_manager.mark_participated(g.current_user)
    db_manager.clear_payment_intent()

    logger.info(f"支付成功: {user.email} order={data['orderId']} event={data.get('eventType')}")
    return jsonify({
        'success': True,
        'message': 'Payment verified',
        'contestantId': user.contestant_id,
        'user': user.to_dict(),
    })
