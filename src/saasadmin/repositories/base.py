from abc import ABC, abstractmethod
from typing import Optional

from saasadmin.models import Order, Page, Tenant


class TenantRepository(ABC):
    @abstractmethod
    def create(self, tenant: Tenant) -> Tenant:
        """Stores the tenant unconditionally and returns it."""

    @abstractmethod
    def find_by_id(self, tenant_id: str) -> Optional[Tenant]:
        ...

    @abstractmethod
    def find_by_email(self, email: str) -> Optional[Tenant]:
        ...

    @abstractmethod
    def update(self, tenant: Tenant) -> Tenant:
        """Replaces the whole record, last write wins."""

    @abstractmethod
    def delete(self, tenant_id: str) -> None:
        ...

    @abstractmethod
    def list(self, limit: Optional[int] = None, last_evaluated_key: Optional[str] = None) -> Page[Tenant]:
        ...


class OrderRepository(ABC):
    @abstractmethod
    def create(self, order: Order) -> Order:
        ...

    @abstractmethod
    def find_by_id(self, order_id: str) -> Optional[Order]:
        ...

    @abstractmethod
    def find_by_tenant(
        self, tenant_id: str, limit: Optional[int] = None, last_evaluated_key: Optional[str] = None
    ) -> Page[Order]:
        ...

    @abstractmethod
    def find_by_status(
        self, status: str, limit: Optional[int] = None, last_evaluated_key: Optional[str] = None
    ) -> Page[Order]:
        ...

    @abstractmethod
    def update(self, order: Order) -> Order:
        ...

    @abstractmethod
    def delete(self, order_id: str) -> None:
        ...

    @abstractmethod
    def list(self, limit: Optional[int] = None, last_evaluated_key: Optional[str] = None) -> Page[Order]:
        ...
