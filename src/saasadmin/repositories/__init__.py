from .base import TenantRepository, OrderRepository
from .tenants import DynamoDBTenantRepository
from .orders import DynamoDBOrderRepository
from .cursor import encode_cursor, decode_cursor

__all__ = [
    "TenantRepository",
    "OrderRepository",
    "DynamoDBTenantRepository",
    "DynamoDBOrderRepository",
    "encode_cursor",
    "decode_cursor",
]
