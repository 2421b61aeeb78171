"""
column-labeler - label the issues behind a GitHub project column's cards.

Re-exports the public API.
"""

from .api import GitHubClient, collect_pages
from .cards import fetch_issue_cards
from .exceptions import (
    ColumnLabelerError,
    ConfigurationError,
    FetchError,
    InvalidInputError,
    IssueNumberParseError,
    LabelingError,
)
from .labeling import IssueLabeler, LabelingCoordinator, extract_issue_number, label_cards
from .resolver import find_column, find_project, resolve_column_id
from .types import Card, LabelingOutcome, parse_column_id

__version__ = "1.0.0"
__all__ = [
    "Card",
    "ColumnLabelerError",
    "ConfigurationError",
    "FetchError",
    "GitHubClient",
    "InvalidInputError",
    "IssueLabeler",
    "IssueNumberParseError",
    "LabelingCoordinator",
    "LabelingError",
    "LabelingOutcome",
    "collect_pages",
    "extract_issue_number",
    "fetch_issue_cards",
    "find_column",
    "find_project",
    "label_cards",
    "parse_column_id",
    "resolve_column_id",
]
