"""Library for formatting command output."""

from abc import ABC, abstractmethod
from collections.abc import Generator
import json
import sys
from typing import Any, TextIO

import yaml

PADDING = 4

OUTPUT_CHOICES = ["table", "yaml", "json"]


def format_columns(
    headers: list[str], rows: list[list[str]]
) -> Generator[str, None, None]:
    """Yield the header and rows aligned on the widest value of each column."""
    data = [headers] + rows
    widths = [max(len(row[i]) for row in data) for i in range(len(headers))]
    format_string = "".join([f"{{:{w + PADDING}}}" for w in widths])
    for row in data:
        yield format_string.format(*row).rstrip()


class Formatter(ABC):
    """Prints a list of records."""

    @abstractmethod
    def format(self, data: list[dict[str, Any]]) -> Generator[str, None, None]:
        """Yield the formatted lines."""

    def print(self, data: list[dict[str, Any]], file: TextIO | None = None) -> None:
        """Output the records, to stdout unless a file is given."""
        out = file or sys.stdout
        for line in self.format(data):
            print(line, file=out)


class TableFormatter(Formatter):
    """A formatter that prints human readable columns."""

    def __init__(self, keys: list[str]) -> None:
        """Initialize TableFormatter with the keys to print as columns."""
        self._keys = keys

    def format(self, data: list[dict[str, Any]]) -> Generator[str, None, None]:
        if not data:
            return
        rows = [[_display(row.get(key)) for key in self._keys] for row in data]
        yield from format_columns([key.upper() for key in self._keys], rows)


class YamlFormatter(Formatter):
    """A formatter that prints a yaml list."""

    def format(self, data: list[dict[str, Any]]) -> Generator[str, None, None]:
        content = yaml.dump(data, sort_keys=False, explicit_start=True)
        yield from content.rstrip("\n").split("\n")


class JsonFormatter(Formatter):
    """A formatter that prints a json list."""

    def format(self, data: list[dict[str, Any]]) -> Generator[str, None, None]:
        yield from json.dumps(data, indent=4, sort_keys=False).split("\n")


def _display(value: Any) -> str:
    if isinstance(value, list):
        return ",".join(str(v) for v in value)
    return str(value)


def get_formatter(output: str, keys: list[str]) -> Formatter:
    """Return the formatter for the output flag."""
    if output == "yaml":
        return YamlFormatter()
    if output == "json":
        return JsonFormatter()
    return TableFormatter(keys)
