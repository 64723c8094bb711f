import logging

from models import PaymentIntent, PAYMENT_INTENT_KEY


logger = logging.getLogger(__name__)


class PaymentDbMixin:
    """支付意向相关操作 mixin。"""

    def get_payment_intent(self):
        data = self.get_json(PAYMENT_INTENT_KEY)
        if not data:
            return None
        try:
            return PaymentIntent.from_dict(data)
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(f"支付意向记录无效: {e}")
            return None

    def save_payment_intent(self, intent):
        self.set_json(PAYMENT_INTENT_KEY, intent.to_dict())
        return intent

    def clear_payment_intent(self):
        self.remove(PAYMENT_INTENT_KEY)
