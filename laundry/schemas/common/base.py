"""
Base schema classes with common fields and configurations.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

__all__ = ["BaseSchema"]


class BaseSchema(BaseModel):
    """
    Base schema with common Pydantic configuration.

    Fields are snake_case in Python and camelCase on the wire
    (``room_number`` <-> ``roomNumber``).
    """

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        alias_generator=to_camel,
        use_enum_values=False,
        str_strip_whitespace=True,
        validate_assignment=True,
    )

    def to_response(self, **kwargs) -> dict:
        """JSON-ready dictionary using the wire field names."""
        return self.model_dump(mode="json", by_alias=True, **kwargs)
