"""
Shared schema base.

The web client speaks camelCase JSON; Python code uses snake_case. Field
names are aliased automatically and both spellings are accepted on input.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serialising fields as camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)
