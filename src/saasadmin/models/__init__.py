from .tenant import Tenant, TenantPlan, TenantStatus, TenantSettings, CreateTenantRequest, UpdateTenantRequest
from .order import (
    Order,
    OrderItem,
    OrderStatus,
    PaymentStatus,
    Address,
    CreateOrderRequest,
    UpdateOrderRequest,
)
from .pagination import Page

__all__ = [
    "Tenant", "TenantPlan", "TenantStatus", "TenantSettings", "CreateTenantRequest", "UpdateTenantRequest",
    "Order", "OrderItem", "OrderStatus", "PaymentStatus", "Address", "CreateOrderRequest", "UpdateOrderRequest",
    "Page",
]
