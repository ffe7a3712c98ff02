import logging
from typing import Any, Dict, Iterable, Optional, Union

from saasadmin.errors import NotFoundError
from saasadmin.models import Address, Order, OrderItem, OrderStatus, Page, PaymentStatus
from saasadmin.repositories import OrderRepository, TenantRepository

logger = logging.getLogger(__name__)


class OrderService:
    """
    Order lifecycle on top of the order and tenant repositories.

    Status and payment status are plain fields: any value may follow any
    other, no transition table is enforced here.
    """

    def __init__(self, order_repository: OrderRepository, tenant_repository: TenantRepository):
        self.order_repository = order_repository
        self.tenant_repository = tenant_repository

    def create_order(
        self,
        tenant_id: str,
        customer_id: str,
        items: Iterable[Union[OrderItem, dict]],
        currency: str = "USD",
        shipping_address: Optional[Address] = None,
        billing_address: Optional[Address] = None,
        notes: Optional[str] = None,
    ) -> Order:
        if not self.tenant_repository.find_by_id(tenant_id):
            raise NotFoundError("Tenant not found", {"tenantId": tenant_id})

        order = Order.create(
            tenant_id=tenant_id,
            customer_id=customer_id,
            items=items,
            currency=currency,
            status=OrderStatus.PENDING,
            payment_status=PaymentStatus.PENDING,
            shipping_address=shipping_address,
            billing_address=billing_address,
            notes=notes,
        )
        created = self.order_repository.create(order)
        logger.info("Created order %s for tenant %s", created.order_id, tenant_id)
        return created

    def get_order(self, order_id: str) -> Order:
        order = self.order_repository.find_by_id(order_id)
        if not order:
            raise NotFoundError("Order not found", {"orderId": order_id})
        return order

    def update_order(
        self,
        order_id: str,
        status: Optional[OrderStatus] = None,
        payment_status: Optional[PaymentStatus] = None,
        notes: Optional[str] = None,
    ) -> Order:
        order = self.get_order(order_id)
        changes: Dict[str, Any] = {}
        if status is not None:
            changes["status"] = status
        if payment_status is not None:
            changes["payment_status"] = payment_status
        if notes is not None:
            changes["notes"] = notes
        return self.order_repository.update(order.with_fields(**changes))

    def delete_order(self, order_id: str) -> None:
        self.get_order(order_id)
        self.order_repository.delete(order_id)
        logger.info("Deleted order %s", order_id)

    def get_orders_by_tenant(
        self, tenant_id: str, limit: Optional[int] = None, last_evaluated_key: Optional[str] = None
    ) -> Page[Order]:
        return self.order_repository.find_by_tenant(tenant_id, limit, last_evaluated_key)

    def get_orders_by_status(
        self, status: str, limit: Optional[int] = None, last_evaluated_key: Optional[str] = None
    ) -> Page[Order]:
        return self.order_repository.find_by_status(status, limit, last_evaluated_key)

    def list_orders(self, limit: Optional[int] = None, last_evaluated_key: Optional[str] = None) -> Page[Order]:
        return self.order_repository.list(limit, last_evaluated_key)

    def confirm_order(self, order_id: str) -> Order:
        return self.update_order(order_id, status=OrderStatus.CONFIRMED)

    def process_order(self, order_id: str) -> Order:
        return self.update_order(order_id, status=OrderStatus.PROCESSING)

    def ship_order(self, order_id: str) -> Order:
        return self.update_order(order_id, status=OrderStatus.SHIPPED)

    def deliver_order(self, order_id: str) -> Order:
        return self.update_order(order_id, status=OrderStatus.DELIVERED)

    def cancel_order(self, order_id: str) -> Order:
        return self.update_order(order_id, status=OrderStatus.CANCELLED)

    def mark_as_paid(self, order_id: str) -> Order:
        return self.update_order(order_id, payment_status=PaymentStatus.PAID)
