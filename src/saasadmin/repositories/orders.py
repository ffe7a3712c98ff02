import logging
from typing import Any, Dict, Optional

from boto3.dynamodb.conditions import Key

from saasadmin.models import Order, Page
from .base import OrderRepository
from .cursor import encode_cursor, paging_args

logger = logging.getLogger(__name__)

ORDER_ID_INDEX = "orderId-index"
TENANT_INDEX = "tenant-index"
STATUS_INDEX = "status-index"


class DynamoDBOrderRepository(OrderRepository):
    """
    Orders table: hash key ``orderId``, range key ``tenantId``.

    Secondary indexes: ``orderId-index`` (orderId), ``tenant-index``
    (tenantId, createdAt) and ``status-index`` (status, createdAt).
    """

    def __init__(self, table):
        self.table = table

    def create(self, order: Order) -> Order:
        self.table.put_item(Item=order.to_item())
        return order

    def find_by_id(self, order_id: str) -> Optional[Order]:
        item = self._find_item(order_id)
        if not item:
            return None
        return Order.model_validate(item)

    def find_by_tenant(
        self, tenant_id: str, limit: Optional[int] = None, last_evaluated_key: Optional[str] = None
    ) -> Page[Order]:
        return self._query_page(TENANT_INDEX, Key("tenantId").eq(tenant_id), limit, last_evaluated_key)

    def find_by_status(
        self, status: str, limit: Optional[int] = None, last_evaluated_key: Optional[str] = None
    ) -> Page[Order]:
        return self._query_page(STATUS_INDEX, Key("status").eq(status), limit, last_evaluated_key)

    def update(self, order: Order) -> Order:
        self.table.put_item(Item=order.to_item())
        return order

    def delete(self, order_id: str) -> None:
        # The primary key is (orderId, tenantId); resolve tenantId through the index first.
        item = self._find_item(order_id)
        if not item:
            logger.info("Order %s not found, nothing to delete", order_id)
            return
        self.table.delete_item(Key={"orderId": item["orderId"], "tenantId": item["tenantId"]})

    def list(self, limit: Optional[int] = None, last_evaluated_key: Optional[str] = None) -> Page[Order]:
        response = self.table.scan(**paging_args(limit, last_evaluated_key))
        return self._page(response)

    def _find_item(self, order_id: str) -> Optional[Dict[str, Any]]:
        response = self.table.query(
            IndexName=ORDER_ID_INDEX,
            KeyConditionExpression=Key("orderId").eq(order_id),
            Limit=1,
        )
        items = response.get("Items", [])
        return items[0] if items else None

    def _query_page(self, index_name, key_condition, limit, last_evaluated_key) -> Page[Order]:
        response = self.table.query(
            IndexName=index_name,
            KeyConditionExpression=key_condition,
            **paging_args(limit, last_evaluated_key),
        )
        return self._page(response)

    def _page(self, response) -> Page[Order]:
        return Page[Order](
            items=[Order.model_validate(item) for item in response.get("Items", [])],
            last_evaluated_key=encode_cursor(response.get("LastEvaluatedKey")),
        )
