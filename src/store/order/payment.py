"""Payment step of order placement.

No gateway is integrated: the step records that a payment would be taken
and always succeeds.
"""

from shared.logging import get_logger

logger = get_logger(__name__)


def process_payment(order, payment_details=None):
    logger.info(
        "Payment skipped, no gateway configured",
        order_id=str(order.id),
        amount=order.total,
        payment_method=order.payment_method,
        has_details=bool(payment_details),
    )
