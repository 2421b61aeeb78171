"""Custom exceptions for column labeling."""

from __future__ import annotations
from typing import Any


class ColumnLabelerError(Exception):
    """Base exception for column-labeler errors."""


class InvalidInputError(ColumnLabelerError, ValueError):
    """A column or project identifier is malformed or out of range."""


class ConfigurationError(ColumnLabelerError, ValueError):
    """Required configuration is missing, invalid, or could not be resolved."""


class FetchError(ColumnLabelerError):
    """Listing cards, projects, or columns failed."""


class IssueNumberParseError(ColumnLabelerError):
    """No issue number could be extracted from a card's content URL."""

    def __init__(self, url: str) -> None:
        super().__init__(f"Failed to extract issue number from url: {url}")
        self.url = url


class LabelingError(ColumnLabelerError):
    """The label request for a single card failed."""

    def __init__(self, card_id: Any, message: str) -> None:
        super().__init__(f"Failed to label card with id {card_id}: {message}")
        self.card_id = card_id
