"""Unit tests for SchemaManager."""

import pytest

from spaceflight_news.models.model_schema import FieldType
from spaceflight_news.services.schema_manager import (
    ConfigurationError,
    SchemaManager,
    SchemaNotFoundError,
    infer_scalar,
    parse_type_tag,
)


def _manager(text: str) -> SchemaManager:
    manager = SchemaManager()
    manager.load_from_text(text)
    return manager


# --- load ---


def test_load_skips_reserved_sections(schema_config_text):
    manager = _manager(schema_config_text)

    assert sorted(manager.list_schemas()) == ["articles", "blogs"]
    assert manager.get_schema("config") is None
    assert manager.get_schema("types") is None


def test_load_reads_fields_from_schema_section(schema_config_text):
    schema = _manager(schema_config_text).get_schema("articles")

    fields = {f.name: f for f in schema.fields}
    assert [f.name for f in schema.fields] == ["id", "title", "summary", "authors"]
    assert fields["id"].kind == FieldType.INTEGER
    assert fields["id"].type_name == "u32"
    assert fields["title"].kind == FieldType.STRING
    assert fields["summary"].kind == FieldType.STRING
    assert fields["summary"].optional is True
    assert fields["authors"].kind == FieldType.LIST
    assert fields["authors"].reference == "Author"


def test_load_reads_fields_from_own_keys_without_schema_section():
    manager = _manager(
        """
[launches]
url = "https://example.com/launches"
enabled = true
name = "String"
window_start = "Option<String>"
"""
    )

    schema = manager.get_schema("launches")
    assert [f.name for f in schema.fields] == ["name", "window_start"]


def test_load_skips_quoted_sibling_sections_at_top_level():
    manager = _manager(
        """
[articles]
url = "https://example.com/articles"

["articles.schema"]
title = "String"

["articles.query_params"]
limit = 10

["articles.nested_fields"]
authors = "Author"
"""
    )

    assert manager.list_schemas() == ["articles"]
    schema = manager.get_schema("articles")
    assert [f.name for f in schema.fields] == ["title"]
    assert schema.nested_fields == {"authors": "Author"}
    assert schema.query_params["limit"].default == 10


def test_load_reads_nested_fields_under_schema_section():
    manager = _manager(
        """
[types]
Author = "object"

[articles.schema]
authors = "Vec<Author>"

[articles.schema.nested_fields]
authors = "Author"
"""
    )

    schema = manager.get_schema("articles")
    assert schema.nested_fields == {"authors": "Author"}
    assert [f.name for f in schema.fields] == ["authors"]


def test_load_query_param_table_shape(schema_config_text):
    params = _manager(schema_config_text).get_schema("articles").query_params

    ordering = params["ordering"]
    assert ordering.param_type == FieldType.STRING
    assert ordering.default is None
    assert ordering.description == "Sort order"


def test_load_query_param_scalar_shape_infers_type(schema_config_text):
    manager = _manager(schema_config_text)

    limit = manager.get_schema("articles").query_params["limit"]
    assert limit.param_type == FieldType.INTEGER
    assert limit.default == 10

    string_limit = manager.get_schema("blogs").query_params["limit"]
    assert string_limit.param_type == FieldType.INTEGER
    assert string_limit.default == 5


def test_load_overwrites_schema_with_same_name():
    manager = SchemaManager()
    manager.load_from_text('[articles.schema]\ntitle = "String"\n')
    manager.load_from_text('[articles.schema]\nsummary = "String"\n')

    assert [f.name for f in manager.get_schema("articles").fields] == ["summary"]


def test_load_from_file(tmp_path, schema_config_text):
    path = tmp_path / "endpoints.toml"
    path.write_text(schema_config_text)

    manager = SchemaManager()
    manager.load_from_file(path)

    assert manager.get_schema("articles") is not None


def test_load_missing_file_raises_configuration_error(tmp_path):
    with pytest.raises(ConfigurationError, match="Cannot read"):
        SchemaManager().load_from_file(tmp_path / "missing.toml")


def test_load_invalid_toml_raises_configuration_error():
    with pytest.raises(ConfigurationError, match="Failed to parse"):
        SchemaManager().load_from_text("[articles\nurl = ")


def test_load_rejects_unknown_type_tag():
    with pytest.raises(ConfigurationError, match="articles.title"):
        _manager('[articles.schema]\ntitle = "HashMap<String, String>"\n')


def test_load_rejects_unresolved_reference():
    with pytest.raises(ConfigurationError, match="unknown type 'Author'"):
        _manager('[articles.schema]\nauthors = "Vec<Author>"\n')


def test_load_accepts_reference_to_other_schema():
    manager = _manager(
        """
[author.schema]
name = "String"

[articles.schema]
authors = "Vec<author>"
"""
    )

    assert manager.get_schema("articles").fields[0].reference == "author"


def test_load_rejects_malformed_query_param_naming_it():
    with pytest.raises(ConfigurationError, match="ordering"):
        _manager('[articles.query_params]\nordering = ["a", "b"]\n')


def test_load_rejects_non_scalar_query_param_type():
    with pytest.raises(ConfigurationError, match="limit"):
        _manager('[articles.query_params.limit]\ntype = "Vec<u32>"\n')


def test_load_rejects_unknown_kind_in_types_section():
    with pytest.raises(ConfigurationError, match="Author"):
        _manager('[types]\nAuthor = "record"\n')


# --- parse_type_tag / infer_scalar ---


@pytest.mark.parametrize(
    "tag,expected",
    [
        ("String", (FieldType.STRING, False, None)),
        ("u32", (FieldType.INTEGER, False, None)),
        ("i64", (FieldType.INTEGER, False, None)),
        ("f64", (FieldType.FLOAT, False, None)),
        ("bool", (FieldType.BOOLEAN, False, None)),
        ("Option<String>", (FieldType.STRING, True, None)),
        ("Vec<String>", (FieldType.LIST, False, None)),
        ("Vec<Author>", (FieldType.LIST, False, "Author")),
        ("Option<Social>", (FieldType.OBJECT, True, "Social")),
        ("Option<Vec<Event>>", (FieldType.LIST, True, "Event")),
    ],
)
def test_parse_type_tag(tag, expected):
    assert parse_type_tag(tag) == expected


@pytest.mark.parametrize("tag", ["Map<String>", "not a type", "Vec<>"])
def test_parse_type_tag_rejects_unknown(tag):
    with pytest.raises(ValueError):
        parse_type_tag(tag)


@pytest.mark.parametrize(
    "value,expected",
    [
        ("10", (FieldType.INTEGER, 10)),
        ("2.5", (FieldType.FLOAT, 2.5)),
        ("true", (FieldType.BOOLEAN, True)),
        ("-published_at", (FieldType.STRING, "-published_at")),
        (7, (FieldType.INTEGER, 7)),
        (False, (FieldType.BOOLEAN, False)),
        ("-3", (FieldType.INTEGER, -3)),
        ("1e3", (FieldType.FLOAT, 1000.0)),
        ("1_000", (FieldType.STRING, "1_000")),
        (" 7 ", (FieldType.STRING, " 7 ")),
        ("1_0.5", (FieldType.STRING, "1_0.5")),
        ("True", (FieldType.STRING, "True")),
        ("\u0663", (FieldType.STRING, "\u0663")),
        ("9223372036854775808", (FieldType.FLOAT, 9223372036854775808.0)),
    ],
)
def test_infer_scalar(value, expected):
    assert infer_scalar(value) == expected


# --- apply_schema ---


def test_apply_schema_unknown_name_raises(schema_config_text):
    manager = _manager(schema_config_text)

    with pytest.raises(SchemaNotFoundError, match="Schema 'events' not found"):
        manager.apply_schema("events", {"id": 1})


def test_apply_schema_copies_object_unchanged(schema_config_text, sample_page):
    manager = _manager(schema_config_text)

    result = manager.apply_schema("articles", sample_page)

    assert result == sample_page
    assert result is not sample_page
    assert manager.apply_schema("articles", result) == result


@pytest.mark.parametrize("data", [[{"id": 1}, {"id": 2}], "text", 42, None])
def test_apply_schema_non_object_passes_through(schema_config_text, data):
    manager = _manager(schema_config_text)

    assert manager.apply_schema("articles", data) == data


# --- build_query_string ---


def _pairs(query: str) -> set[str]:
    assert query.startswith("?")
    return set(query[1:].split("&"))


def test_build_query_string_adds_defaults_for_missing_params():
    manager = _manager(
        """
[articles.query_params]
limit = 10

[articles.query_params.ordering]
type = "String"
"""
    )

    query = manager.build_query_string("articles", {"ordering": "-published_at"})

    assert _pairs(query) == {"limit=10", "ordering=-published_at"}


def test_build_query_string_caller_value_overrides_default(schema_config_text):
    manager = _manager(schema_config_text)

    query = manager.build_query_string("articles", {"limit": "3"})

    assert _pairs(query) == {"limit=3"}


def test_build_query_string_drops_undeclared_params(schema_config_text):
    manager = _manager(schema_config_text)

    query = manager.build_query_string(
        "articles", {"news_site": "NASA", "ordering": "title"}
    )

    assert _pairs(query) == {"limit=10", "ordering=title"}


def test_build_query_string_percent_encodes_values(schema_config_text):
    manager = _manager(schema_config_text)

    query = manager.build_query_string("articles", {"ordering": "a b&c/d"})

    assert "ordering=a%20b%26c%2Fd" in _pairs(query)


def test_build_query_string_renders_boolean_default():
    manager = _manager("[articles.query_params]\nis_featured = true\n")

    assert manager.build_query_string("articles", {}) == "?is_featured=true"


def test_build_query_string_empty_when_no_pairs():
    manager = _manager('[articles.query_params.ordering]\ntype = "String"\n')

    assert manager.build_query_string("articles", {}) == ""


def test_build_query_string_unknown_schema_raises(schema_config_text):
    manager = _manager(schema_config_text)

    with pytest.raises(SchemaNotFoundError):
        manager.build_query_string("reports", {})


def test_build_query_string_keeps_non_numeric_string_defaults():
    manager = _manager('[x.query_params]\nsearch = "1_000"\nq = " 7 "\n')

    assert manager.build_query_string("x", {}) == "?search=1_000&q=%207%20"


def test_build_query_string_renders_integral_float_default():
    manager = _manager("[x.query_params]\nscore__gte = 5.0\nratio = 2.5\n")

    assert manager.build_query_string("x", {}) == "?score__gte=5&ratio=2.5"
