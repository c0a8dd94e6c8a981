"""
Base schema classes with common configuration.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

__all__ = ["BaseSchema"]


class BaseSchema(BaseModel):
    """
    Base schema with common Pydantic configuration.

    Response schemas are built straight from ORM rows and service dataclasses,
    hence ``from_attributes``.
    """

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        # Keep enums as Enum instances; they serialize to their value.
        use_enum_values=False,
        str_strip_whitespace=True,
    )
