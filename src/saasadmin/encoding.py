import json
from decimal import Decimal
from typing import Any


def json_default(value: Any):
    """Money is Decimal internally; emit whole amounts as ints and the rest as floats."""
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def dumps(value: Any, **kwargs) -> str:
    return json.dumps(value, default=json_default, **kwargs)


def loads(raw: str) -> Any:
    return json.loads(raw, parse_float=Decimal)
