"""
支付网关
配置了 Razorpay 密钥时走 Razorpay，否则使用模拟网关（本地演示与测试）。
两种网关都用 HMAC-SHA256(order_id|payment_id) 校验回调签名。
"""

import hmac
import hashlib
import logging
import uuid
from datetime import datetime, timezone

import razorpay
from flask import current_app

logger = logging.getLogger(__name__)


def compute_signature(secret, order_id, payment_id):
    message = f"{order_id}|{payment_id}"
    return hmac.new(
        secret.encode('utf-8'),
        message.encode('utf-8'),
        hashlib.sha256
    ).hexdigest()


def _receipt(prefix='kh'):
    return f"{prefix}_{int(datetime.now(timezone.utc).timestamp())}"


class RazorpayGateway:
    """Razorpay 网关"""

    name = 'razorpay'

    def __init__(self, key_id, key_secret, currency='INR'):
        self.key_id = key_id
        self.key_secret = key_secret
        self.currency = currency
        self.client = razorpay.Client(auth=(key_id, key_secret))

    def create_order(self, amount, receipt=None, notes=None):
        """
        创建订单

        Args:
            amount: 金额（卢比），换算为 paise 提交
            receipt: 收据编号
            notes: 附加信息

        Returns:
            dict: Razorpay 订单对象（id, amount, currency ...）
        """
        order_data = {
            'amount': int(float(amount) * 100),
            'currency': self.currency,
            'receipt': receipt or _receipt(),
            'notes': notes or {},
        }
        logger.info(f"Creating Razorpay order: {order_data}")
        order = self.client.order.create(data=order_data)
        logger.info(f"Razorpay order created: {order['id']}")
        return order

    def verify_signature(self, order_id, payment_id, signature):
        expected = compute_signature(self.key_secret, order_id, payment_id)
        is_valid = hmac.compare_digest(expected, signature or '')
        logger.info(f"Payment signature verification: {is_valid}")
        return is_valid

    def collect_fee(self, amount, receipt=None, notes=None):
        """报名费：创建订单，实际付款在前端收银台完成"""
        order = self.create_order(amount, receipt=receipt, notes=notes)
        return {'order_id': order['id'], 'payment_id': None, 'captured': False}


class MockPaymentGateway:
    """模拟网关：订单立即生成，报名费直接视为已收"""

    name = 'mock'

    def __init__(self, secret, currency='INR'):
        self.key_id = 'rzp_test_mock'
        self.secret = secret
        self.currency = currency

    def create_order(self, amount, receipt=None, notes=None):
        order = {
            'id': f"order_{uuid.uuid4().hex[:14]}",
            'entity': 'order',
            'amount': int(float(amount) * 100),
            'currency': self.currency,
            'receipt': receipt or _receipt(),
            'notes': notes or {},
            'status': 'created',
        }
        logger.info(f"Mock order created: {order['id']}")
        return order

    def sign(self, order_id, payment_id):
        return compute_signature(self.secret, order_id, payment_id)

    def verify_signature(self, order_id, payment_id, signature):
        is_valid = hmac.compare_digest(self.sign(order_id, payment_id), signature or '')
        logger.info(f"Mock payment signature verification: {is_valid}")
        return is_valid

    def collect_fee(self, amount, receipt=None, notes=None):
        order = self.create_order(amount, receipt=receipt, notes=notes)
        return {
            'order_id': order['id'],
            'payment_id': f"pay_{uuid.uuid4().hex[:14]}",
            'captured': True,
        }


def create_gateway(config):
    """根据配置创建网关"""
    key_id = config.get('RAZORPAY_KEY_ID')
    key_secret = config.get('RAZORPAY_KEY_SECRET')
    currency = config.get('PAYMENT_CURRENCY', 'INR')
    if key_id and key_secret:
        return RazorpayGateway(key_id, key_secret, currency=currency)
    logger.warning("未配置 Razorpay 密钥，使用模拟支付网关")
    return MockPaymentGateway(config.get('MOCK_PAYMENT_SECRET', 'kalakriti-mock-secret'), currency=currency)


def get_payment_gateway():
    """取当前应用注入的网关"""
    return current_app.extensions['payment_gateway']
