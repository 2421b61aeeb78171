"""
Project and column lookup by display name.

Lookups return None when nothing matches; only ``resolve_targets`` turns a
missing match into a ConfigurationError, because there the column is required.
"""

from __future__ import annotations
import logging
from typing import Any, Optional, TYPE_CHECKING

import requests

from .api import collect_pages
from .config import parse_columns_labels
from .exceptions import ConfigurationError, FetchError
from .types import Column, ColumnId, LabelTarget, Project, get_attr_name, parse_column_id

if TYPE_CHECKING:
    from .api import GitHubClient
    from .config import Config


def _first_named(items: list[Any], name: str) -> Optional[Any]:
    for item in items:
        if get_attr_name(item) == name:
            return item
    return None


def find_project(client: "GitHubClient", project_name: str) -> Optional[Project]:
    """
    Find the first repository project named exactly ``project_name``.

    Raises:
        FetchError: if the project listing fails
    """
    try:
        projects = collect_pages(lambda page, size: client.list_projects(page=page, per_page=size))
    except requests.RequestException as e:
        raise FetchError(f"Failed to list projects: {e}") from e

    match = _first_named(projects, project_name)
    if match is None:
        logging.debug("No project named %r among %d projects", project_name, len(projects))
        return None
    return Project.from_dict(match)


def find_column(client: "GitHubClient", project_id: int, column_name: str) -> Optional[Column]:
    """
    Find the first column of a project named exactly ``column_name``.

    Raises:
        FetchError: if the column listing fails
    """
    try:
        columns = collect_pages(
            lambda page, size: client.list_columns(project_id, page=page, per_page=size)
        )
    except requests.RequestException as e:
        raise FetchError(f"Failed to list columns of project {project_id}: {e}") from e

    match = _first_named(columns, column_name)
    if match is None:
        logging.debug("No column named %r in project %s", column_name, project_id)
        return None
    return Column.from_dict(match)


def resolve_column_id(
    client: "GitHubClient",
    project_name: str,
    column_name: str,
) -> Optional[ColumnId]:
    """Resolve a column id from a project name and a column name."""
    project = find_project(client, project_name)
    if project is None:
        return None
    column = find_column(client, project.id, column_name)
    if column is None:
        return None
    return parse_column_id(column.id)


def resolve_targets(client: "GitHubClient", config: "Config") -> list[LabelTarget]:
    """
    Build the list of columns to label from configuration.

    Raises:
        ConfigurationError: if a required column cannot be resolved
        InvalidInputError: if a configured column id is malformed
        FetchError: if a project or column listing fails
    """
    if config.columns_labels:
        return _resolve_columns_labels(client, config)

    if config.column_id:
        column_id = parse_column_id(config.column_id)
    else:
        column_id = _require_column(client, config.project_name, config.column_name)

    return [LabelTarget(column_id=column_id, labels=(config.label_to_add,))]


def _resolve_columns_labels(client: "GitHubClient", config: "Config") -> list[LabelTarget]:
    entries = parse_columns_labels(config.columns_labels)
    if not entries:
        raise ConfigurationError("columns_labels holds no usable entries")

    targets = []
    for entry in entries:
        column_id = entry.column_id
        if column_id is None:
            column_id = _require_column(client, config.project_name, entry.column_name)
        targets.append(LabelTarget(column_id=column_id, labels=entry.labels))
    return targets


def _require_column(
    client: "GitHubClient",
    project_name: Optional[str],
    column_name: Optional[str],
) -> ColumnId:
    if not project_name:
        raise ConfigurationError(f"Column {column_name!r} given by name but project_name is missing")

    column_id = resolve_column_id(client, project_name, column_name)
    if column_id is None:
        raise ConfigurationError(
            f"Could not find column {column_name!r} in project {project_name!r}"
        )
    logging.info("Resolved column %r of project %r to id %s", column_name, project_name, column_id)
    return column_id
