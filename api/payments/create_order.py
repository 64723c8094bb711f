from flask import request, jsonify

from models import PaymentIntent
from utils.decorators import validate_json, log_action, handle_storage_errors, get_authenticated_user
from utils.event_catalog import get_event_details, get_artwork_price
from utils.payment_gateway import get_payment_gateway

from . import payments_bp, db_manager, logger


@payments_bp.route('/create-order', methods=['POST'])
@validate_json(['eventType'])
@log_action('创建支付订单')
@handle_storage_errors
def create_order():
    """按赛事和作品数量创建订单；未登录时保存支付意向并返回 401"""
    data = request.get_json()
    event_type = data['eventType']

    event = get_event_details(event_type)
    if event is None:
        return jsonify({'success': False, 'message': 'Event not found'}), 404

    try:
        number_of_artworks = int(data.get('numberOfArtworks') or 1)
    except (TypeError, ValueError):
        return jsonify({'success': False, 'message': 'numberOfArtworks must be a number'}), 400

    price = get_artwork_price(event_type, number_of_artworks)
    if price is None:
        return jsonify({
            'success': False,
            'message': f'No pricing for {number_of_artworks} artworks'
        }), 400

    user = get_authenticated_user()
    if user is None:
        db_manager.save_payment_intent(PaymentIntent(event_type, number_of_artworks))
        logger.info(f"未登录用户的支付意向已保存: {event_type} x{number_of_artworks}")
        return jsonify({
            'success': False,
            'message': 'Please log in to continue with your payment',
            'intentSaved': True,
        }), 401

    gateway = get_payment_gateway()
    try:
        order = gateway.create_order(
            price,
            notes={
                'eventType': event_type,
                'numberOfArtworks': number_of_artworks,
                'email': user.email,
            },
        )
    except Exception as e:
        logger.error(f"支付网关创建订单失败: {e}")
        return jsonify({
            'success': False,
            'message': 'There was an error processing your payment. Please try again.'
        }), 502

    return jsonify({
        'success': True,
        'order': {
            'id': order['id'],
            'amount': order['amount'],
            'currency': order['currency'],
        },
        'keyId': gateway.key_id,
        'description': f"Payment for {event['title']}",
    })
