"""
Shared schema helpers.
"""
from typing import Optional

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema that reads and writes camelCase JSON keys."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


def normalize_optional_text(v: Optional[str]) -> Optional[str]:
    """
    Strip surrounding whitespace; blank strings become None.

    Args:
        v: Free text from a request body

    Returns:
        Stripped text, or None if nothing is left
    """
    if v is None:
        return None
    v = v.strip()
    return v or None


def enum_value(v):
    """Unwrap enum members to their raw value; other values pass through."""
    return getattr(v, "value", v)
