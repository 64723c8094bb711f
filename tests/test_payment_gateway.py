from __future__ import annotations

from utils.payment_gateway import (
    MockPaymentGateway,
    RazorpayGateway,
    compute_signature,
    create_gateway,
)


def test_mock_order_amount_in_paise():
    order = MockPaymentGateway("secret").create_order(499, notes={"eventType": "art"})
    assert order["id"].startswith("order_")
    assert order["amount"] == 49900
    assert order["currency"] == "INR"
    assert order["notes"] == {"eventType": "art"}


def test_mock_signature_verification():
    gateway = MockPaymentGateway("secret")
    signature = compute_signature("secret", "order_1", "pay_1")
    assert gateway.verify_signature("order_1", "pay_1", signature)
    assert not gateway.verify_signature("order_1", "pay_2", signature)
    assert not gateway.verify_signature("order_1", "pay_1", None)


def test_mock_fee_is_captured():
    payment = MockPaymentGateway("secret").collect_fee(150)
    assert payment["captured"] is True
    assert payment["payment_id"].startswith("pay_")


def test_gateway_selection():
    assert isinstance(create_gateway({"MOCK_PAYMENT_SECRET": "s"}), MockPaymentGateway)
    gateway = create_gateway({"RAZORPAY_KEY_ID": "rzp_test_key", "RAZORPAY_KEY_SECRET": "shh"})
    assert isinstance(gateway, RazorpayGateway)
    assert gateway.key_id == "rzp_test_key"


def test_razorpay_signature_uses_key_secret():
    gateway = RazorpayGateway("rzp_test_key", "shh")
    signature = compute_signature("shh", "order_9", "pay_9")
    assert gateway.verify_signature("order_9", "pay_9", signature)
    assert not gateway.verify_signature("order_9", "pay_9", compute_signature("other", "order_9", "pay_9"))
