from datetime import datetime, timedelta, timezone
from typing import Optional

import ulid
from pydantic import BaseModel
from pydantic.alias_generators import to_camel

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S.%fZ"


def new_id(prefix: str) -> str:
    return f"{prefix}_{ulid.new()}"


def next_timestamp(previous: Optional[str] = None) -> str:
    """
    Returns the current UTC time as a fixed-width ISO-8601 string.

    When ``previous`` is given the result is strictly later than it, so a
    refreshed ``updatedAt`` always differs from the one it replaces. The fixed
    width keeps the strings sortable in the ``createdAt`` range keys.
    """
    now = datetime.now(timezone.utc)
    if previous:
        last = datetime.strptime(previous, TIMESTAMP_FORMAT).replace(tzinfo=timezone.utc)
        if now <= last:
            now = last + timedelta(microseconds=1)
    return now.strftime(TIMESTAMP_FORMAT)


class CamelModel(BaseModel):
    """snake_case in Python, camelCase on the wire and in DynamoDB."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        use_enum_values = True
        from_attributes = True
        frozen = True

    def to_item(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


class Entity(CamelModel):
    created_at: str
    updated_at: str

    def with_fields(self, **changes):
        """
        Returns a new record with ``changes`` applied and ``updated_at`` refreshed.

        The new record is validated again, so nested values may be passed as
        plain dicts. The receiver is left untouched.
        """
        unknown = set(changes) - set(type(self).model_fields)
        if unknown:
            raise ValueError(f"Unknown fields for {type(self).__name__}: {sorted(unknown)}")
        data = self.model_dump()
        data.update(changes)
        data["updated_at"] = next_timestamp(self.updated_at)
        return type(self).model_validate(data)
