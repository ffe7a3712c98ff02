from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class Page(BaseModel, Generic[T]):
    items: List[T] = Field(default_factory=list)
    last_evaluated_key: Optional[str] = Field(None, description="Opaque continuation cursor")

    @property
    def count(self) -> int:
        return len(self.items)
