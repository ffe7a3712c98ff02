from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal

from pydantic import BaseModel

from saasadmin.models import TenantStatus
from .api import ApiClient

# Aggregates are computed from a single page of each collection.
STATS_PAGE_SIZE = 1000


class DashboardStats(BaseModel):
    total_tenants: int
    total_orders: int
    total_revenue: Decimal
    active_tenants: int


def fetch_dashboard_stats(client: ApiClient, page_size: int = STATS_PAGE_SIZE) -> DashboardStats:
    """Fetches tenants and orders side by side and derives the dashboard counters."""
    # requests.Session is not thread-safe, so each call gets its own
    tenants_client, orders_client = client.fork(), client.fork()
    try:
        with ThreadPoolExecutor(max_workers=2) as pool:
            tenants_future = pool.submit(tenants_client.get_tenants, page_size)
            orders_future = pool.submit(orders_client.get_orders, page_size)
            tenants = tenants_future.result()
            orders = orders_future.result()
    finally:
        tenants_client.session.close()
        orders_client.session.close()

    return DashboardStats(
        total_tenants=tenants.count,
        total_orders=orders.count,
        total_revenue=sum((order.total_amount for order in orders.items), Decimal("0")),
        active_tenants=sum(1 for tenant in tenants.items if tenant.status == TenantStatus.ACTIVE),
    )
