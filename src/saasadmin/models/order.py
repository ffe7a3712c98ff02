from decimal import Decimal
from enum import Enum
from typing import Any, Iterable, List, Optional, Union

from pydantic import Field

from .base import CamelModel, Entity, new_id, next_timestamp


class OrderStatus(str, Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    PROCESSING = "PROCESSING"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"
    RETURNED = "RETURNED"


class PaymentStatus(str, Enum):
    PENDING = "PENDING"
    PAID = "PAID"
    FAILED = "FAILED"
    REFUNDED = "REFUNDED"
    PARTIALLY_REFUNDED = "PARTIALLY_REFUNDED"


class Address(CamelModel):
    street: str
    city: str
    state: str
    zip_code: str
    country: str


class OrderItem(CamelModel):
    product_id: str
    name: str
    quantity: int = Field(..., ge=1)
    unit_price: Decimal = Field(..., ge=0)
    total_price: Decimal = Decimal("0")

    def priced(self) -> "OrderItem":
        """Copy of the item with ``total_price`` recomputed as quantity times unit price."""
        return self.model_copy(update={"total_price": self.unit_price * self.quantity})


class Order(Entity):
    order_id: str = Field(..., description="Unique order identifier (order_<ULID>)")
    tenant_id: str = Field(..., description="Owning tenant, a soft reference")
    customer_id: str
    items: List[OrderItem] = Field(default_factory=list)
    total_amount: Decimal = Decimal("0")
    currency: str = "USD"
    status: OrderStatus = OrderStatus.PENDING
    payment_status: PaymentStatus = PaymentStatus.PENDING
    shipping_address: Optional[Address] = None
    billing_address: Optional[Address] = None
    notes: Optional[str] = None

    @classmethod
    def create(
        cls,
        tenant_id: str,
        customer_id: str,
        items: Iterable[Union[OrderItem, dict]],
        currency: str = "USD",
        status: OrderStatus = OrderStatus.PENDING,
        payment_status: PaymentStatus = PaymentStatus.PENDING,
        shipping_address: Optional[Any] = None,
        billing_address: Optional[Any] = None,
        notes: Optional[str] = None,
    ) -> "Order":
        priced = [
            (item if isinstance(item, OrderItem) else OrderItem.model_validate(item)).priced()
            for item in items
        ]
        now = next_timestamp()
        return cls(
            order_id=new_id("order"),
            tenant_id=tenant_id,
            customer_id=customer_id,
            items=priced,
            total_amount=sum((item.total_price for item in priced), Decimal("0")),
            currency=currency,
            status=status,
            payment_status=payment_status,
            shipping_address=shipping_address,
            billing_address=billing_address,
            notes=notes,
            created_at=now,
            updated_at=now,
        )

    def calculate_total(self) -> Decimal:
        return sum((item.total_price for item in self.items), Decimal("0"))

    def with_status(self, status: OrderStatus) -> "Order":
        return self.with_fields(status=status)

    def with_payment_status(self, payment_status: PaymentStatus) -> "Order":
        return self.with_fields(payment_status=payment_status)


class CreateOrderRequest(CamelModel):
    tenant_id: str = Field(..., min_length=1)
    customer_id: str = Field(..., min_length=1)
    items: List[OrderItem] = Field(..., min_length=1)
    currency: str = "USD"
    shipping_address: Optional[Address] = None
    billing_address: Optional[Address] = None
    notes: Optional[str] = None


class UpdateOrderRequest(CamelModel):
    status: Optional[OrderStatus] = None
    payment_status: Optional[PaymentStatus] = None
    notes: Optional[str] = None
