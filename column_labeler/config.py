"""
Configuration management via environment variables and CLI arguments.

Environment variables follow the GitHub Actions input convention, so the
tool can run unchanged as a workflow step:
  INPUT_TOKEN          - GitHub token (falls back to GITHUB_TOKEN; required)
  INPUT_LABEL_TO_ADD   - Label applied to every issue card in the column
  INPUT_COLUMN_ID      - Numeric id of the project column
  INPUT_PROJECT_NAME   - Project name, used to resolve columns by name
  INPUT_COLUMN_NAME    - Column name within INPUT_PROJECT_NAME
  INPUT_COLUMNS_LABELS - JSON array of per-column label sets
  INPUT_THROTTLE_DELAY - Seconds between label requests for large batches
  INPUT_DEBUG          - Enable debug logging (any value = true)
  GITHUB_REPOSITORY    - Repository as owner/repo (required)
  GITHUB_API_URL       - API root (default: https://api.github.com)
  RUNNER_DEBUG         - Set by Actions when step debugging is on
"""

from __future__ import annotations
import argparse
import json
import logging
import os
from dataclasses import dataclass
from typing import Any, Optional, Sequence

from .api import DEFAULT_API_URL
from .exceptions import ConfigurationError, InvalidInputError
from .types import ColumnId, LabelName, parse_column_id


@dataclass(frozen=True)
class ColumnLabels:
    """One element of ``columns_labels``: a column and the labels for it."""

    labels: tuple[LabelName, ...]
    column_id: Optional[ColumnId] = None
    column_name: Optional[str] = None


@dataclass(frozen=True)
class Config:
    """Runtime configuration for column-labeler."""

    token: str
    owner: str
    repo: str
    label_to_add: Optional[str] = None
    column_id: Optional[str] = None
    project_name: Optional[str] = None
    column_name: Optional[str] = None
    columns_labels: Optional[str] = None  # raw JSON, see parse_columns_labels
    api_url: str = DEFAULT_API_URL
    throttle_delay: float = 1.0
    max_workers: int = 8
    debug: bool = False

    def __post_init__(self) -> None:
        if not self.token:
            raise ConfigurationError("Missing required arg token")
        if not self.owner or not self.repo:
            raise ConfigurationError("Missing required repository (owner/repo)")
        if self.throttle_delay < 0:
            raise ConfigurationError("throttle_delay cannot be negative")
        if self.max_workers < 1:
            raise ConfigurationError("max_workers must be at least 1")

        # Per-column label sets replace the single label/column pair
        if self.columns_labels:
            return

        if not self.label_to_add:
            raise ConfigurationError("Missing required arg label_to_add")
        if not self.column_id and not (self.project_name and self.column_name):
            raise ConfigurationError(
                "Missing required arg column_id (or project_name and column_name)"
            )

    @property
    def repository(self) -> str:
        return f"{self.owner}/{self.repo}"

    @classmethod
    def from_env_and_cli(cls, argv: Optional[Sequence[str]] = None) -> "Config":
        """
        Build config from environment variables with CLI overrides.

        Environment variables provide defaults, CLI arguments override them.
        Blank values count as unset, since Actions passes '' for omitted inputs.
        """
        parser = _create_parser()
        args = parser.parse_args(argv)

        token = args.token or _env('INPUT_TOKEN') or _env('GITHUB_TOKEN') or ''
        repository = args.repository or _env('GITHUB_REPOSITORY') or ''
        owner, repo = _split_repository(repository)

        throttle_delay = args.throttle_delay
        if throttle_delay is None:
            throttle_delay = _env_float('INPUT_THROTTLE_DELAY', 1.0)

        return cls(
            token=token,
            owner=owner,
            repo=repo,
            label_to_add=args.label_to_add or _env('INPUT_LABEL_TO_ADD'),
            column_id=args.column_id or _env('INPUT_COLUMN_ID'),
            project_name=args.project_name or _env('INPUT_PROJECT_NAME'),
            column_name=args.column_name or _env('INPUT_COLUMN_NAME'),
            columns_labels=args.columns_labels or _env('INPUT_COLUMNS_LABELS'),
            api_url=args.api_url or _env('GITHUB_API_URL') or DEFAULT_API_URL,
            throttle_delay=throttle_delay,
            debug=args.debug or bool(_env('INPUT_DEBUG')) or _env('RUNNER_DEBUG') == '1',
        )


def _env(name: str) -> Optional[str]:
    value = os.environ.get(name, '').strip()
    return value or None


def _env_float(name: str, default: float) -> float:
    value = _env(name)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got {value!r}") from None


def _split_repository(repository: str) -> tuple[str, str]:
    if not repository:
        return '', ''
    owner, sep, repo = repository.strip().partition('/')
    if not sep or not owner or not repo or '/' in repo:
        raise ConfigurationError(f"Repository must look like owner/repo, got {repository!r}")
    return owner, repo


def parse_columns_labels(raw: str) -> list[ColumnLabels]:
    """
    Parse the ``columns_labels`` JSON array.

    Each element must be an object with a non-empty ``labels`` array of
    non-empty strings, plus a ``column_id`` or a ``column_name``. Elements
    failing these checks are dropped with a warning.

    Raises:
        ConfigurationError: if raw is not valid JSON or not an array
    """
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"columns_labels is not valid JSON: {e}") from e

    if not isinstance(data, list):
        raise ConfigurationError("columns_labels must be a JSON array")

    entries: list[ColumnLabels] = []
    for index, element in enumerate(data):
        entry = _parse_column_labels_element(index, element)
        if entry is not None:
            entries.append(entry)

    return entries


def _parse_column_labels_element(index: int, element: Any) -> Optional[ColumnLabels]:
    if not isinstance(element, dict):
        logging.warning("columns_labels[%d] is not an object, skipping", index)
        return None

    labels = element.get('labels')
    if not isinstance(labels, list) or not labels:
        logging.warning("columns_labels[%d] has no labels, skipping", index)
        return None
    if not all(isinstance(label, str) and label.strip() for label in labels):
        logging.warning("columns_labels[%d] has an empty or non-string label, skipping", index)
        return None

    column_id: Optional[ColumnId] = None
    if element.get('column_id') not in (None, ''):
        try:
            column_id = parse_column_id(element['column_id'])
        except InvalidInputError as e:
            logging.warning("columns_labels[%d]: %s, skipping", index, e)
            return None

    column_name = element.get('column_name') or None
    if column_id is None and not isinstance(column_name, str):
        logging.warning("columns_labels[%d] names no column_id or column_name, skipping", index)
        return None

    return ColumnLabels(
        labels=tuple(label.strip() for label in labels),
        column_id=column_id,
        column_name=column_name if column_id is None else None,
    )


def _make_wide(formatter, w: int = 120, h: int = 36):
    """Return a wider HelpFormatter, if possible."""
    try:
        kwargs = {'width': w, 'max_help_position': h}
        formatter(None, **kwargs)
        return lambda prog: formatter(prog, **kwargs)
    except TypeError:
        return formatter


def _create_parser() -> argparse.ArgumentParser:
    """Create argument parser with all supported options."""
    parser = argparse.ArgumentParser(
        prog='column-labeler',
        description='Label every issue card in a GitHub project column',
        formatter_class=_make_wide(argparse.HelpFormatter, w=120, h=60)
    )

    parser.add_argument(
        '-t', '--token',
        help='GitHub token (or set INPUT_TOKEN / GITHUB_TOKEN env var)',
        default=None,
        type=str
    )
    parser.add_argument(
        '-r', '--repository',
        help='Repository as owner/repo (or set GITHUB_REPOSITORY env var)',
        type=str
    )
    parser.add_argument(
        '-l', '--label_to_add',
        help='Label added to each issue card',
        type=str
    )
    parser.add_argument(
        '-c', '--column_id',
        help='Numeric id of the project column',
        type=str
    )
    parser.add_argument(
        '--project_name',
        help='Project to search for --column_name',
        type=str
    )
    parser.add_argument(
        '--column_name',
        help='Column name, resolved within --project_name',
        type=str
    )
    parser.add_argument(
        '--columns_labels',
        help='JSON array of {"column_id"|"column_name": ..., "labels": [...]} objects',
        type=str
    )
    parser.add_argument(
        '--api_url',
        help=f'GitHub API root (default: {DEFAULT_API_URL})',
        type=str
    )
    parser.add_argument(
        '--throttle_delay',
        help='Seconds between label requests for batches of 100+ cards (default: 1)',
        default=None,
        type=float
    )
    parser.add_argument(
        '--debug',
        help='Enable debug logging',
        action='store_true'
    )

    return parser


def setup_logging(debug: bool = False) -> None:
    """
    Configure logging for column-labeler.

    Args:
        debug: If True, set level to DEBUG and also log to a file
    """
    level = logging.DEBUG if debug else logging.INFO

    fmt = '%(asctime)s %(levelname)-8s %(message)s'
    datefmt = '%Y-%m-%d %H:%M:%S'

    # Always log to stderr; debug also goes to file
    handlers: list[logging.Handler] = [logging.StreamHandler()]

    if debug:
        try:
            handlers.append(logging.FileHandler('column_labeler_debug.log', 'w+', 'utf-8'))
        except OSError:
            logging.getLogger(__name__).debug("Could not open debug log file")

    logging.basicConfig(
        level=level,
        format=fmt,
        datefmt=datefmt,
        handlers=handlers
    )
