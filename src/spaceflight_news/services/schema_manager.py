"""
Schema management for configuration-driven endpoints.

Loads field, nested-field and query-parameter definitions from a TOML
document and uses them to build query strings and to pass response JSON
through a named schema.

A schema entry ``<name>`` may carry its parts either as sub-tables
(``[articles.query_params]``, which TOML nests under ``articles``) or as
quoted top-level keys (``["articles.query_params"]``). Both are accepted.
"""

from __future__ import annotations

import logging
import re
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any
from urllib.parse import quote

from spaceflight_news.constants import (
    NESTED_FIELDS_SECTION,
    QUERY_PARAMS_SECTION,
    RESERVED_ENDPOINT_KEYS,
    RESERVED_SECTIONS,
    SCHEMA_SECTION,
)
from spaceflight_news.models.model_schema import (
    FieldDefinition,
    FieldType,
    QueryParamDefinition,
    QueryParamValue,
    Schema,
    format_param_value,
)

logger = logging.getLogger(__name__)

_SUBSECTION_MARKERS = tuple(
    f".{part}" for part in (SCHEMA_SECTION, QUERY_PARAMS_SECTION, NESTED_FIELDS_SECTION)
)

_PRIMITIVE_TAGS: dict[str, FieldType] = {
    "string": FieldType.STRING,
    "str": FieldType.STRING,
    "int": FieldType.INTEGER,
    "integer": FieldType.INTEGER,
    "usize": FieldType.INTEGER,
    "isize": FieldType.INTEGER,
    **{f"{sign}{bits}": FieldType.INTEGER for sign in "ui" for bits in (8, 16, 32, 64)},
    "float": FieldType.FLOAT,
    "f32": FieldType.FLOAT,
    "f64": FieldType.FLOAT,
    "bool": FieldType.BOOLEAN,
    "boolean": FieldType.BOOLEAN,
}

_LIST_TAGS = {"list", "array", "vec"}
_GENERIC_TAG = re.compile(r"^(?P<outer>\w+)\s*<\s*(?P<inner>.+)\s*>$")
_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
_STRICT_INT = re.compile(r"[+-]?\d+", re.ASCII)
_STRICT_FLOAT = re.compile(
    r"[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf|infinity|nan)",
    re.IGNORECASE | re.ASCII,
)
_INT64_MIN, _INT64_MAX = -(2**63), 2**63 - 1


class ConfigurationError(Exception):
    """Raised when a configuration document is unreadable or invalid."""


class SchemaNotFoundError(LookupError):
    """Raised when a schema name has not been loaded."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Schema '{name}' not found")


# ---------------------------------------------------------------------------
# Document helpers
# ---------------------------------------------------------------------------


def parse_toml(text: str) -> dict[str, Any]:
    """Parse TOML text, raising ConfigurationError on syntax errors."""
    try:
        return tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(f"Failed to parse configuration: {e}") from e


def read_toml_file(path: Path | str) -> dict[str, Any]:
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"Cannot read configuration file {path}: {e}") from e
    return parse_toml(text)


def is_owner_entry(name: str, value: Any) -> bool:
    """True for top-level entries that describe an endpoint/schema."""
    if name in RESERVED_SECTIONS:
        return False
    if any(marker in name for marker in _SUBSECTION_MARKERS):
        return False
    return isinstance(value, Mapping)


def get_section(
    document: Mapping[str, Any], name: str, part: str
) -> Mapping[str, Any] | None:
    """Return the ``<name>.<part>`` section in either of its spellings."""
    section = document.get(f"{name}.{part}")
    if section is None:
        owner = document.get(name)
        if isinstance(owner, Mapping):
            section = owner.get(part)
    return section if isinstance(section, Mapping) else None


def infer_scalar(value: QueryParamValue) -> tuple[FieldType, QueryParamValue]:
    """Infer the type of a bare query-parameter value.

    Strings are parsed as a 64-bit integer, a float, then exactly "true" or
    "false" before falling back to string. Only plain numeric spellings are
    accepted: digit separators and surrounding whitespace keep a value a string.
    """
    if isinstance(value, bool):
        return FieldType.BOOLEAN, value
    if isinstance(value, int):
        return FieldType.INTEGER, value
    if isinstance(value, float):
        return FieldType.FLOAT, value

    text = str(value)
    if _STRICT_INT.fullmatch(text):
        number = int(text)
        if _INT64_MIN <= number <= _INT64_MAX:
            return FieldType.INTEGER, number
    if _STRICT_FLOAT.fullmatch(text):
        return FieldType.FLOAT, float(text)
    if text in ("true", "false"):
        return FieldType.BOOLEAN, text == "true"
    return FieldType.STRING, text


def parse_type_tag(tag: str) -> tuple[FieldType, bool, str | None]:
    """Parse a configuration type tag into (kind, optional, reference).

    Raises ValueError for tags outside the supported set.
    """
    tag = tag.strip()
    generic = _GENERIC_TAG.match(tag)
    if generic:
        outer = generic.group("outer").lower()
        inner = generic.group("inner").strip()
        if outer == "option":
            kind, _, reference = parse_type_tag(inner)
            return kind, True, reference
        if outer in _LIST_TAGS:
            item_kind, _, reference = parse_type_tag(inner)
            if item_kind.is_primitive:
                return FieldType.LIST, False, None
            return FieldType.LIST, False, reference
        raise ValueError(f"unsupported generic type '{tag}'")

    lowered = tag.lower()
    if lowered in _PRIMITIVE_TAGS:
        return _PRIMITIVE_TAGS[lowered], False, None
    if lowered in _LIST_TAGS:
        return FieldType.LIST, False, None
    if lowered == FieldType.OBJECT.value:
        return FieldType.OBJECT, False, None
    if _IDENTIFIER.match(tag):
        return FieldType.OBJECT, False, tag
    raise ValueError(f"unknown type '{tag}'")


# ---------------------------------------------------------------------------
# Schema manager
# ---------------------------------------------------------------------------


class SchemaManager:
    """Holds every schema loaded from configuration, keyed by name."""

    def __init__(self) -> None:
        self._schemas: dict[str, Schema] = {}

    # -- Loading --------------------------------------------------------------

    def load_from_file(self, path: Path | str) -> None:
        self.load(read_toml_file(path))

    def load_from_text(self, text: str) -> None:
        self.load(parse_toml(text))

    def load(self, document: Mapping[str, Any]) -> None:
        """Load every schema entry of a parsed TOML document.

        Object references in field types are checked once the whole
        document is read, against schema names and ``[types]`` entries.
        """
        known_types = self._parse_types_section(document.get("types"))
        loaded: list[Schema] = []

        for name, value in document.items():
            if not is_owner_entry(name, value):
                continue
            schema = Schema(
                name=name,
                fields=self._parse_fields(document, name),
                nested_fields=self._parse_nested_fields(document, name),
                query_params=self._parse_query_params(document, name),
            )
            self._schemas[name] = schema
            loaded.append(schema)
            logger.debug(
                "Loaded schema %s: %d fields, %d query params",
                name,
                len(schema.fields),
                len(schema.query_params),
            )

        known = {n.lower() for n in self._schemas} | known_types
        for schema in loaded:
            for field in schema.fields:
                if field.reference and field.reference.lower() not in known:
                    raise ConfigurationError(
                        f"Field '{schema.name}.{field.name}' references unknown "
                        f"type '{field.reference}'"
                    )

        logger.info("Loaded %d schemas", len(loaded))

    @staticmethod
    def _parse_types_section(section: Any) -> set[str]:
        if section is None:
            return set()
        if not isinstance(section, Mapping):
            raise ConfigurationError("[types] must be a table")
        for type_name, kind in section.items():
            if isinstance(kind, Mapping):
                continue
            try:
                FieldType(str(kind).lower())
            except ValueError as e:
                raise ConfigurationError(
                    f"Type '{type_name}' declares unknown kind '{kind}'"
                ) from e
        return {str(type_name).lower() for type_name in section}

    def _parse_fields(
        self, document: Mapping[str, Any], name: str
    ) -> list[FieldDefinition]:
        section = get_section(document, name, SCHEMA_SECTION)
        from_schema_section = section is not None
        if section is None:
            section = document[name]

        fields = []
        for field_name, spec in section.items():
            if field_name in (NESTED_FIELDS_SECTION, QUERY_PARAMS_SECTION):
                continue
            if not from_schema_section and field_name in RESERVED_ENDPOINT_KEYS:
                continue
            if isinstance(spec, str):
                type_name, optional = spec, False
            elif isinstance(spec, Mapping) and isinstance(spec.get("type"), str):
                type_name, optional = spec["type"], bool(spec.get("optional", False))
            else:
                continue

            try:
                kind, tag_optional, reference = parse_type_tag(type_name)
            except ValueError as e:
                raise ConfigurationError(
                    f"Invalid type for field '{name}.{field_name}': {e}"
                ) from e
            fields.append(
                FieldDefinition(
                    name=field_name,
                    type_name=type_name,
                    kind=kind,
                    optional=optional or tag_optional,
                    reference=reference,
                )
            )
        return fields

    @staticmethod
    def _parse_nested_fields(document: Mapping[str, Any], name: str) -> dict[str, str]:
        nested: dict[str, str] = {}
        schema_section = get_section(document, name, SCHEMA_SECTION)
        candidates = [
            schema_section.get(NESTED_FIELDS_SECTION) if schema_section else None,
            get_section(document, name, NESTED_FIELDS_SECTION),
        ]
        for section in candidates:
            if not isinstance(section, Mapping):
                continue
            for field_name, target in section.items():
                if isinstance(target, str):
                    nested[field_name] = target
        return nested

    def _parse_query_params(
        self, document: Mapping[str, Any], name: str
    ) -> dict[str, QueryParamDefinition]:
        section = get_section(document, name, QUERY_PARAMS_SECTION)
        if section is None:
            return {}
        return {
            param_name: self._parse_query_param_definition(param_name, value)
            for param_name, value in section.items()
        }

    @staticmethod
    def _parse_query_param_definition(name: str, value: Any) -> QueryParamDefinition:
        """Parse one query parameter: a definition table or a bare default."""
        if isinstance(value, Mapping):
            type_tag = value.get("type", "String")
            default = value.get("default")
            description = value.get("description")
            if not isinstance(type_tag, str):
                raise ConfigurationError(
                    f"Invalid query parameter definition for {name}: type must be a string"
                )
            try:
                param_type, _, _ = parse_type_tag(type_tag)
            except ValueError as e:
                raise ConfigurationError(
                    f"Invalid query parameter definition for {name}: {e}"
                ) from e
            if not param_type.is_primitive:
                raise ConfigurationError(
                    f"Invalid query parameter definition for {name}: "
                    f"type '{type_tag}' is not a scalar"
                )
            if default is not None and not isinstance(default, (str, int, float, bool)):
                raise ConfigurationError(
                    f"Invalid query parameter definition for {name}: "
                    "default must be a string, integer, float or boolean"
                )
            if description is not None and not isinstance(description, str):
                raise ConfigurationError(
                    f"Invalid query parameter definition for {name}: "
                    "description must be a string"
                )
            return QueryParamDefinition(
                name=name, type=param_type, default=default, description=description
            )

        if isinstance(value, (str, int, float, bool)):
            param_type, default = infer_scalar(value)
            return QueryParamDefinition(name=name, type=param_type, default=default)

        raise ConfigurationError(f"Invalid query parameter definition for {name}")

    # -- Lookup ---------------------------------------------------------------

    def get_schema(self, name: str) -> Schema | None:
        return self._schemas.get(name)

    def list_schemas(self) -> list[str]:
        return list(self._schemas)

    def _require(self, name: str) -> Schema:
        schema = self._schemas.get(name)
        if schema is None:
            raise SchemaNotFoundError(name)
        return schema

    # -- Use ------------------------------------------------------------------

    def apply_schema(self, schema_name: str, data: Any) -> Any:
        """Pass ``data`` through the named schema.

        Objects are copied key by key unchanged; arrays and scalars are
        returned as-is. No field validation or nested resolution happens.
        """
        self._require(schema_name)
        if isinstance(data, dict):
            return {key: value for key, value in data.items()}
        return data

    def build_query_string(self, schema_name: str, params: Mapping[str, str]) -> str:
        """Build ``?k=v&...`` from caller params plus schema defaults.

        Caller keys the schema does not declare are dropped. Returns an
        empty string when no pair is produced.
        """
        schema = self._require(schema_name)
        pairs = [
            f"{key}={quote(str(value), safe='')}"
            for key, value in params.items()
            if key in schema.query_params
        ]
        for param_name, definition in schema.query_params.items():
            if param_name in params or definition.default is None:
                continue
            encoded = quote(format_param_value(definition.default), safe="")
            pairs.append(f"{param_name}={encoded}")

        if not pairs:
            return ""
        return "?" + "&".join(pairs)
