from .tenants import TenantService
from .orders import OrderService

__all__ = ["TenantService", "OrderService"]
