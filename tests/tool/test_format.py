"""Tests for the format library."""

import json

from artifact_resolver.tool.format import (
    JsonFormatter,
    TableFormatter,
    YamlFormatter,
    format_columns,
    get_formatter,
)

CREDENTIALS = [
    {"name": "stable", "types": ["helm/chart"]},
    {"name": "files", "types": ["http/file"]},
]


def test_format_columns_empty_rows() -> None:
    """Tests with no rows."""
    assert list(format_columns(["a", "b", "c"], [])) == ["a    b    c"]


def test_format_columns_rows() -> None:
    """Tests format with normal rows"""
    assert list(
        format_columns(["name", "version"], [["podinfo", "6.5.1"], ["weave", "4.0.36"]])
    ) == [
        "name       version",
        "podinfo    6.5.1",
        "weave      4.0.36",
    ]


def test_table_formatter() -> None:
    """Table formatting joins list values."""
    formatter = TableFormatter(keys=["name", "types"])
    assert list(formatter.format(CREDENTIALS)) == [
        "NAME      TYPES",
        "stable    helm/chart",
        "files     http/file",
    ]
    assert list(formatter.format([])) == []


def test_table_formatter_keys() -> None:
    """Table formatting with a subset of the columns."""
    formatter = TableFormatter(keys=["name"])
    assert list(formatter.format(CREDENTIALS)) == [
        "NAME",
        "stable",
        "files",
    ]


def test_yaml_formatter() -> None:
    """Yaml formatting of a list of records."""
    assert list(YamlFormatter().format(CREDENTIALS)) == [
        "---",
        "- name: stable",
        "  types:",
        "  - helm/chart",
        "- name: files",
        "  types:",
        "  - http/file",
    ]


def test_json_formatter() -> None:
    """Json formatting of a list of records."""
    lines = list(JsonFormatter().format(CREDENTIALS))
    assert json.loads("\n".join(lines)) == CREDENTIALS


def test_get_formatter() -> None:
    """The output flag selects the formatter."""
    assert isinstance(get_formatter("table", ["name"]), TableFormatter)
    assert isinstance(get_formatter("yaml", ["name"]), YamlFormatter)
    assert isinstance(get_formatter("json", ["name"]), JsonFormatter)
