from enum import Enum
from typing import List, Optional

from pydantic import Field

from .base import CamelModel, Entity, new_id, next_timestamp


class TenantPlan(str, Enum):
    FREE = "FREE"
    BASIC = "BASIC"
    PREMIUM = "PREMIUM"
    ENTERPRISE = "ENTERPRISE"


class TenantStatus(str, Enum):
    ACTIVE = "ACTIVE"
    SUSPENDED = "SUSPENDED"
    INACTIVE = "INACTIVE"
    PENDING = "PENDING"


class TenantSettings(CamelModel):
    max_users: Optional[int] = None
    features: Optional[List[str]] = None
    custom_domain: Optional[str] = None


class Tenant(Entity):
    tenant_id: str = Field(..., description="Unique tenant identifier (tenant_<ULID>)")
    name: str = Field(..., min_length=1)
    email: str = Field(..., description="Contact email, unique across tenants")
    plan: TenantPlan = TenantPlan.FREE
    status: TenantStatus = TenantStatus.PENDING
    settings: Optional[TenantSettings] = None

    @classmethod
    def create(
        cls,
        name: str,
        email: str,
        plan: TenantPlan = TenantPlan.FREE,
        status: TenantStatus = TenantStatus.PENDING,
        settings: Optional[TenantSettings] = None,
    ) -> "Tenant":
        now = next_timestamp()
        return cls(
            tenant_id=new_id("tenant"),
            name=name,
            email=email,
            plan=plan,
            status=status,
            settings=settings,
            created_at=now,
            updated_at=now,
        )

    def with_status(self, status: TenantStatus) -> "Tenant":
        return self.with_fields(status=status)


class CreateTenantRequest(CamelModel):
    name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3)
    plan: Optional[TenantPlan] = None


class UpdateTenantRequest(CamelModel):
    name: Optional[str] = Field(None, min_length=1)
    plan: Optional[TenantPlan] = None
    status: Optional[TenantStatus] = None
    settings: Optional[TenantSettings] = None
