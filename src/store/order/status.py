"""Administrative order status changes."""

from protean import handle
from protean.fields import DateTime, Identifier, String
from protean.utils.globals import current_domain

from shared.logging import get_logger
from store.domain import store
from store.order.order import Order

logger = get_logger(__name__)


@store.command(part_of="Order")
class UpdateOrderStatus:
    order_id = Identifier(required=True)
    status = String(required=True, max_length=50)
    tracking_number = String(max_length=100)
    shipping_carrier = String(max_length=100)
    estimated_delivery = DateTime()


@store.command_handler(part_of=Order)
class UpdateOrderStatusHandler:
    @handle(UpdateOrderStatus)
    def update_status(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.update_status(
            status=command.status,
            tracking_number=command.tracking_number,
            shipping_carrier=command.shipping_carrier,
            estimated_delivery=command.estimated_delivery,
        )
        repo.add(order)
        logger.info("Order status updated", order_id=str(order.id), status=order.status)
        return str(order.id)


def tracking(order) -> dict:
    return {
        "order_id": str(order.id),
        "status": order.status,
        "estimated_delivery": order.estimated_delivery,
        "tracking_number": order.tracking_number,
        "shipping_carrier": order.shipping_carrier,
        "updates": order.tracking_updates(),
    }
