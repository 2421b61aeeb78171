"""
Core labeling logic for column cards.

This module contains:
1. Issue number extraction from a card's content URL
2. The per-card labeler, which adds the configured labels to one issue
3. The batch coordinator, which labels a list of cards and tallies the result

Batches at or above the throttle threshold are labeled one card at a time
with a fixed delay between requests; smaller batches go through a thread pool.
"""

from __future__ import annotations
import logging
import re
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Optional, Sequence, TYPE_CHECKING

import requests

from .api import PAGE_SIZE
from .exceptions import IssueNumberParseError, LabelingError
from .types import Card, IssueNumber, LabelName, LabelingOutcome

if TYPE_CHECKING:
    from .api import GitHubClient
    from .config import Config

ISSUE_NUMBER_RE = re.compile(r'/issues/(\d+)$')

THROTTLE_THRESHOLD = PAGE_SIZE
THROTTLE_DELAY = 1.0
MAX_WORKERS = 8


def extract_issue_number(content_url: str) -> IssueNumber:
    """
    Extract the trailing issue number from a card's content URL.

    Raises:
        IssueNumberParseError: if the URL does not end in /issues/<number>
    """
    match = ISSUE_NUMBER_RE.search(content_url)
    if not match:
        raise IssueNumberParseError(content_url)
    return int(match.group(1))


class IssueLabeler:
    """Adds a fixed set of labels to the issue behind a card."""

    def __init__(self, client: "GitHubClient", labels: Sequence[LabelName]) -> None:
        self.client = client
        self.labels = list(labels)

    def label_card(self, card: Card) -> bool:
        """
        Label the issue behind ``card``.

        Returns:
            True if a label request succeeded, False if the card is not an issue

        Raises:
            IssueNumberParseError: if the content URL holds no issue number
            LabelingError: if the label request fails
        """
        if not card.content_url:
            logging.info("Card with id %s is not an issue", card.id)
            return False

        issue_number = extract_issue_number(card.content_url)

        try:
            self.client.add_labels(issue_number, self.labels)
        except requests.RequestException as e:
            raise LabelingError(card.id, str(e)) from e

        logging.debug("Labeled issue #%d (card %s) with %s", issue_number, card.id, self.labels)
        return True


class LabelingCoordinator:
    """
    Labels a batch of cards, each exactly once.

    Per-card failures are logged and counted; they never stop the batch.
    ``run`` only returns once every attempt has finished.
    """

    def __init__(
        self,
        labeler: IssueLabeler,
        throttle_threshold: int = THROTTLE_THRESHOLD,
        throttle_delay: float = THROTTLE_DELAY,
        max_workers: int = MAX_WORKERS,
        sleep: Optional[Callable[[float], None]] = None,
    ) -> None:
        self.labeler = labeler
        self.throttle_threshold = throttle_threshold
        self.throttle_delay = throttle_delay
        self.max_workers = max_workers
        self._sleep = sleep or time.sleep

    def run(self, cards: Sequence[Card]) -> LabelingOutcome:
        """
        Label every card in ``cards``.

        Returns:
            Outcome with the number of cards attempted and labeled
        """
        if not cards:
            return LabelingOutcome(attempted=0, labeled=0)

        if len(cards) >= self.throttle_threshold:
            logging.info(
                "Throttling %d label requests to one every %.1fs",
                len(cards), self.throttle_delay
            )
            results = self._run_throttled(cards)
        else:
            results = self._run_concurrent(cards)

        return LabelingOutcome(attempted=len(cards), labeled=sum(results))

    def _run_throttled(self, cards: Sequence[Card]) -> list[bool]:
        results = []
        for index, card in enumerate(cards):
            if index:
                self._sleep(self.throttle_delay)
            results.append(self._attempt(card))
        return results

    def _run_concurrent(self, cards: Sequence[Card]) -> list[bool]:
        workers = max(1, min(self.max_workers, len(cards)))
        with ThreadPoolExecutor(max_workers=workers) as executor:
            return list(executor.map(self._attempt, cards))

    def _attempt(self, card: Card) -> bool:
        try:
            return self.labeler.label_card(card)
        except Exception as e:
            logging.warning("Failed to label card with id: %s", card.id)
            logging.warning("%s", e)
            return False


def label_cards(
    client: "GitHubClient",
    cards: Sequence[Card],
    labels: Sequence[LabelName],
    config: Optional["Config"] = None,
) -> LabelingOutcome:
    """
    Label a batch of cards.

    Args:
        client: API client
        cards: Cards to label
        labels: Labels added to each issue
        config: Runtime configuration supplying throttle settings

    Returns:
        Outcome with the number of cards attempted and labeled
    """
    coordinator = LabelingCoordinator(IssueLabeler(client, labels))
    if config is not None:
        coordinator.throttle_delay = config.throttle_delay
        coordinator.max_workers = config.max_workers
    return coordinator.run(cards)
