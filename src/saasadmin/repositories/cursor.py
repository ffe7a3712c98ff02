import base64
import binascii
import json
from typing import Any, Dict, Optional

from saasadmin.errors import ValidationError


def encode_cursor(last_evaluated_key: Optional[Dict[str, Any]]) -> Optional[str]:
    """Turns a DynamoDB ``LastEvaluatedKey`` into an opaque, URL-safe token."""
    if not last_evaluated_key:
        return None
    raw = json.dumps(last_evaluated_key, sort_keys=True, default=str)
    return base64.urlsafe_b64encode(raw.encode()).decode()


def decode_cursor(cursor: Optional[str]) -> Optional[Dict[str, Any]]:
    if not cursor:
        return None
    try:
        key = json.loads(base64.urlsafe_b64decode(cursor.encode()).decode())
    except (binascii.Error, UnicodeDecodeError, ValueError):
        raise ValidationError("Invalid lastEvaluatedKey")
    # Every key attribute of both tables is a string
    if not isinstance(key, dict) or not key:
        raise ValidationError("Invalid lastEvaluatedKey")
    if not all(isinstance(name, str) and isinstance(value, str) for name, value in key.items()):
        raise ValidationError("Invalid lastEvaluatedKey")
    return key


def paging_args(limit: Optional[int], last_evaluated_key: Optional[str]) -> Dict[str, Any]:
    """Builds the ``Limit``/``ExclusiveStartKey`` kwargs shared by scan and query."""
    kwargs: Dict[str, Any] = {}
    if limit is not None:
        if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
            raise ValidationError("limit must be a positive integer")
        kwargs["Limit"] = limit
    start_key = decode_cursor(last_evaluated_key)
    if start_key:
        kwargs["ExclusiveStartKey"] = start_key
    return kwargs
