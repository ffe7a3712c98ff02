import logging
import os
from typing import Optional

from pydantic import BaseModel


class EnvironmentConfig(BaseModel):
    region: str = "us-east-1"
    tenants_table: str = "tenants"
    orders_table: str = "orders"
    api_gateway_url: Optional[str] = None
    user_pool_id: Optional[str] = None
    user_pool_client_id: Optional[str] = None
    log_level: str = "INFO"
    cors_allow_origin: str = "*"


def get_environment_config() -> EnvironmentConfig:
    """
    Reads the configuration from the environment.

    Called per invocation so that every Lambda run (and every test) sees the
    variables as they are at that moment.
    """
    return EnvironmentConfig(
        region=os.environ.get("AWS_REGION", "us-east-1"),
        tenants_table=os.environ.get("TENANTS_TABLE", "tenants"),
        orders_table=os.environ.get("ORDERS_TABLE", "orders"),
        api_gateway_url=os.environ.get("API_GATEWAY_URL"),
        user_pool_id=os.environ.get("USER_POOL_ID"),
        user_pool_client_id=os.environ.get("USER_POOL_CLIENT_ID"),
        log_level=os.environ.get("LOG_LEVEL", "INFO"),
        cors_allow_origin=os.environ.get("CORS_ALLOW_ORIGIN", "*"),
    )


def configure_logging(level: str = "INFO"):
    # The Lambda runtime installs its own handler on the root logger.
    root_logger = logging.getLogger()
    if not root_logger.handlers:
        logging.basicConfig(format="%(asctime)s %(levelname)s %(name)s %(message)s")
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    logging.getLogger("botocore").setLevel(logging.WARNING)
