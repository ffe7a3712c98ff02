import logging
from typing import Optional

from boto3.dynamodb.conditions import Key

from saasadmin.models import Page, Tenant
from .base import TenantRepository
from .cursor import encode_cursor, paging_args

logger = logging.getLogger(__name__)

EMAIL_INDEX = "email-index"


class DynamoDBTenantRepository(TenantRepository):
    """Tenants table: hash key ``tenantId``, GSI ``email-index`` on ``email``."""

    def __init__(self, table):
        self.table = table

    def create(self, tenant: Tenant) -> Tenant:
        self.table.put_item(Item=tenant.to_item())
        return tenant

    def find_by_id(self, tenant_id: str) -> Optional[Tenant]:
        response = self.table.get_item(Key={"tenantId": tenant_id})
        item = response.get("Item")
        if not item:
            return None
        return Tenant.model_validate(item)

    def find_by_email(self, email: str) -> Optional[Tenant]:
        response = self.table.query(
            IndexName=EMAIL_INDEX,
            KeyConditionExpression=Key("email").eq(email),
        )
        items = response.get("Items", [])
        if not items:
            return None
        return Tenant.model_validate(items[0])

    def update(self, tenant: Tenant) -> Tenant:
        self.table.put_item(Item=tenant.to_item())
        return tenant

    def delete(self, tenant_id: str) -> None:
        self.table.delete_item(Key={"tenantId": tenant_id})

    def list(self, limit: Optional[int] = None, last_evaluated_key: Optional[str] = None) -> Page[Tenant]:
        response = self.table.scan(**paging_args(limit, last_evaluated_key))
        logger.debug("Scanned %d tenants", response.get("Count", 0))
        return Page[Tenant](
            items=[Tenant.model_validate(item) for item in response.get("Items", [])],
            last_evaluated_key=encode_cursor(response.get("LastEvaluatedKey")),
        )
