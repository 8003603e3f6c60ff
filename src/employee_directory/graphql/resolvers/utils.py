"""Helpers shared by the record resolvers."""

import time
from typing import Any

import strawberry


def generate_record_id() -> str:
    """Millisecond timestamp identifier.

    Two records created within the same millisecond receive the same id.
    """
    return str(int(time.time() * 1000))


def provided_fields(**fields: Any) -> dict[str, Any]:
    """Keep only the arguments the client actually supplied.

    Omitted arguments (UNSET) and explicit nulls are both dropped, since every
    stored field is required.
    """
    return {
        key: value
        for key, value in fields.items()
        if value is not strawberry.UNSET and value is not None
    }
