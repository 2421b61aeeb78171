"""
column-labeler entry point.

Run with: python -m column_labeler [options]
"""

from __future__ import annotations
import logging
import sys
from typing import Optional, Sequence

from .api import GitHubClient
from .cards import fetch_issue_cards
from .config import Config, setup_logging
from .exceptions import ColumnLabelerError
from .labeling import label_cards
from .resolver import resolve_targets


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Main entry point for column-labeler.

    Args:
        argv: Command line arguments (defaults to sys.argv)

    Returns:
        Exit code (0 for success)
    """
    # Parse configuration
    try:
        config = Config.from_env_and_cli(argv)
    except SystemExit:
        return 1
    except Exception as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    setup_logging(config.debug)
    logging.debug("Labeling issue cards in %s", config.repository)

    with GitHubClient(config.token, config.owner, config.repo, base_url=config.api_url) as client:
        try:
            targets = resolve_targets(client, config)
        except ColumnLabelerError as e:
            logging.error("%s", e)
            return 1

        for target in targets:
            try:
                cards = fetch_issue_cards(client, target.column_id)
            except ColumnLabelerError as e:
                logging.error("Failed to fetch card data")
                logging.error("%s", e)
                return 1

            outcome = label_cards(client, cards, target.labels, config)
            logging.info(outcome.summary())
            if outcome.failed:
                logging.warning(
                    "%d card%s in column %s could not be labeled",
                    outcome.failed, "" if outcome.failed == 1 else "s", target.column_id
                )

    return 0


if __name__ == "__main__":
    sys.exit(main())
