"""
Card fetching for a single project column.
"""

from __future__ import annotations
import logging
from typing import Any, TYPE_CHECKING

import requests

from .api import PAGE_SIZE, iter_pages
from .exceptions import FetchError
from .types import Card, parse_column_id

if TYPE_CHECKING:
    from .api import GitHubClient


def fetch_issue_cards(client: "GitHubClient", column_id: Any, per_page: int = PAGE_SIZE) -> list[Card]:
    """
    Fetch every non-archived, issue-backed card of a column.

    Args:
        client: API client
        column_id: Column id as an int or numeric string
        per_page: Page size; a shorter page ends the listing

    Returns:
        Issue cards of all pages, in fetch order

    Raises:
        InvalidInputError: if column_id is not a positive integer
        FetchError: if any page fails to load
    """
    column = parse_column_id(column_id)

    def fetch_page(page: int, size: int) -> list[Any]:
        return client.list_cards(column, page=page, per_page=size)

    cards: list[Card] = []
    fetched = 0
    try:
        for page in iter_pages(fetch_page, per_page):
            fetched += len(page)
            cards.extend(c for c in map(Card.from_dict, page) if c.is_issue)
    except requests.RequestException as e:
        raise FetchError(f"Failed to fetch cards of column {column}: {e}") from e

    logging.info(
        "Fetched %d card%s from column %s, %d backed by an issue",
        fetched, "" if fetched == 1 else "s", column, len(cards)
    )
    return cards
