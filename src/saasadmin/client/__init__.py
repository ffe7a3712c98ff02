from .api import ApiClient, ApiError
from .dashboard import DashboardStats, fetch_dashboard_stats

__all__ = ["ApiClient", "ApiError", "DashboardStats", "fetch_dashboard_stats"]
