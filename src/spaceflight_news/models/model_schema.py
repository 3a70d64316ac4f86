"""Models for configuration-declared schemas and executor endpoints."""

import math
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from spaceflight_news.constants import DEFAULT_MAX_DISPLAY_ITEMS, DEFAULT_OUTPUT_FORMAT

QueryParamValue = str | int | float | bool


class FieldType(str, Enum):
    """Closed set of kinds a schema field or query parameter may declare."""

    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    LIST = "list"
    OBJECT = "object"

    @property
    def is_primitive(self) -> bool:
        return self not in (FieldType.LIST, FieldType.OBJECT)


class FieldDefinition(BaseModel):
    """A single field of a schema.

    ``type_name`` keeps the tag as written in the configuration; ``kind`` is
    the parsed form. ``reference`` names the schema (or ``[types]`` entry) an
    object field, or the items of a list field, resolve against.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    type_name: str
    kind: FieldType
    optional: bool = False
    reference: str | None = None


class QueryParamDefinition(BaseModel):
    """A query parameter accepted by an endpoint."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    param_type: FieldType = Field(alias="type")
    default: QueryParamValue | None = None
    description: str | None = None


class Schema(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    fields: list[FieldDefinition] = []
    nested_fields: dict[str, str] = {}
    query_params: dict[str, QueryParamDefinition] = {}


class EndpointConfig(BaseModel):
    """One configured endpoint of an executor run."""

    model_config = ConfigDict(frozen=True)

    name: str
    url: str
    enabled: bool = False
    schema_name: str
    query_params: dict[str, str] = {}


class GlobalConfig(BaseModel):
    """Display options from the ``[config]`` section."""

    model_config = ConfigDict(frozen=True)

    output_format: str = DEFAULT_OUTPUT_FORMAT
    max_display_items: int = DEFAULT_MAX_DISPLAY_ITEMS


def format_param_value(value: QueryParamValue) -> str:
    """Render a query parameter value the way it is sent on the wire.

    Booleans are lowercase and integral floats drop their fractional part
    (``5.0`` is sent as ``5``).
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if value.is_integer():
            return str(int(value))
    return str(value)
