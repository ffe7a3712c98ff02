import logging
from typing import Any, Dict, Optional

from saasadmin.errors import AlreadyExistsError, NotFoundError
from saasadmin.models import Page, Tenant, TenantPlan, TenantSettings, TenantStatus
from saasadmin.repositories import TenantRepository

logger = logging.getLogger(__name__)


class TenantService:
    def __init__(self, tenant_repository: TenantRepository):
        self.tenant_repository = tenant_repository

    def create_tenant(self, name: str, email: str, plan: Optional[TenantPlan] = None) -> Tenant:
        """
        Creates a PENDING tenant.

        Email uniqueness is a read-then-write check; two concurrent calls with
        the same email can both pass it.
        """
        if self.tenant_repository.find_by_email(email):
            raise AlreadyExistsError("Tenant with this email already exists", {"email": email})

        tenant = Tenant.create(
            name=name,
            email=email,
            plan=plan or TenantPlan.FREE,
            status=TenantStatus.PENDING,
        )
        created = self.tenant_repository.create(tenant)
        logger.info("Created tenant %s", created.tenant_id)
        return created

    def get_tenant(self, tenant_id: str) -> Tenant:
        tenant = self.tenant_repository.find_by_id(tenant_id)
        if not tenant:
            raise NotFoundError("Tenant not found", {"tenantId": tenant_id})
        return tenant

    def update_tenant(
        self,
        tenant_id: str,
        name: Optional[str] = None,
        plan: Optional[TenantPlan] = None,
        status: Optional[TenantStatus] = None,
        settings: Optional[TenantSettings] = None,
    ) -> Tenant:
        tenant = self.get_tenant(tenant_id)
        changes: Dict[str, Any] = {
            field: value
            for field, value in (("name", name), ("plan", plan), ("status", status), ("settings", settings))
            if value is not None
        }
        return self.tenant_repository.update(tenant.with_fields(**changes))

    def delete_tenant(self, tenant_id: str) -> None:
        # Orders referencing the tenant are left in place.
        self.get_tenant(tenant_id)
        self.tenant_repository.delete(tenant_id)
        logger.info("Deleted tenant %s", tenant_id)

    def list_tenants(self, limit: Optional[int] = None, last_evaluated_key: Optional[str] = None) -> Page[Tenant]:
        return self.tenant_repository.list(limit, last_evaluated_key)

    def activate_tenant(self, tenant_id: str) -> Tenant:
        return self.update_tenant(tenant_id, status=TenantStatus.ACTIVE)

    def suspend_tenant(self, tenant_id: str) -> Tenant:
        return self.update_tenant(tenant_id, status=TenantStatus.SUSPENDED)
