"""
Shared types and helpers.

Identifiers
===========
Column ids reach the program as integers (from the API) or as strings (from
workflow inputs and the command line). ``parse_column_id`` is the single place
where either form is validated and turned into a ``ColumnId``; everything
downstream takes a ``ColumnId`` and does not re-check it.

Accepted:
  - ``42`` and ``"42"`` (surrounding whitespace is ignored)

Rejected with ``InvalidInputError``:
  - non-numeric strings (``"abc"``, ``"12abc"``, ``""``)
  - floats and bools
  - zero, including ``"0"`` (indistinguishable from "not provided")
  - negative values
"""

from __future__ import annotations
import re
from dataclasses import dataclass
from typing import Any, NewType, Optional, TypeAlias

from .exceptions import InvalidInputError


# Type aliases
ColumnId = NewType("ColumnId", int)
IssueNumber: TypeAlias = int
LabelName: TypeAlias = str

_INTEGER_RE = re.compile(r'-?[0-9]+')


def parse_column_id(value: Any) -> ColumnId:
    """
    Validate a column id given as an int or a numeric string.

    Raises:
        InvalidInputError: for anything but a positive integer
    """
    # bool is an int subclass
    if isinstance(value, bool):
        raise InvalidInputError("Param column_id is not an integer")

    if isinstance(value, str):
        text = value.strip()
        if not _INTEGER_RE.fullmatch(text):
            raise InvalidInputError(f"Param column_id is not an integer: {value!r}")
        value = int(text)

    if not isinstance(value, int):
        raise InvalidInputError(f"Param column_id is not an integer: {value!r}")
    if value < 0:
        raise InvalidInputError("Param column_id cannot be negative")
    if value == 0:
        raise InvalidInputError("Param column_id cannot be 0")

    return ColumnId(value)


def get_attr_name(x: Any) -> Optional[str]:
    """
    Get name from object or dict.

    Works with the dataclasses below as well as raw API payloads.
    """
    if hasattr(x, 'name'):
        return x.name
    elif isinstance(x, dict):
        return x.get('name')
    return None


def get_attr_id(x: Any) -> Optional[Any]:
    """Get id from object or dict."""
    if hasattr(x, 'id'):
        return x.id
    elif isinstance(x, dict):
        return x.get('id')
    return None


@dataclass(frozen=True)
class Card:
    """A project board card; ``content_url`` is only set for issue cards."""

    id: Any
    content_url: Optional[str] = None
    note: Optional[str] = None

    @property
    def is_issue(self) -> bool:
        return bool(self.content_url)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Card":
        return cls(
            id=data.get('id'),
            content_url=data.get('content_url') or None,
            note=data.get('note'),
        )


@dataclass(frozen=True)
class Project:
    id: int
    name: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Project":
        return cls(id=data['id'], name=data.get('name', ''))


@dataclass(frozen=True)
class Column:
    id: int
    name: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Column":
        return cls(id=data['id'], name=data.get('name', ''))


@dataclass(frozen=True)
class LabelTarget:
    """A column whose issue cards receive ``labels``."""

    column_id: ColumnId
    labels: tuple[LabelName, ...]


@dataclass(frozen=True)
class LabelingOutcome:
    """Aggregate result of labeling one batch of cards."""

    attempted: int
    labeled: int

    @property
    def failed(self) -> int:
        return self.attempted - self.labeled

    def summary(self) -> str:
        return f"Labeled/relabeled {self.labeled} of {self.attempted} cards"
