"""
GitHub REST API wrapper.

Covers the four calls the labeler needs: listing a column's cards, listing
the repository's projects, listing a project's columns, and adding labels to
an issue. Pagination is handled by ``collect_pages``.
"""

from __future__ import annotations
import logging
from typing import Any, Callable, Iterator, Optional

import requests

__all__ = [
    'DEFAULT_API_URL',
    'PAGE_SIZE',
    'GitHubClient',
    'collect_pages',
    'iter_pages',
]

DEFAULT_API_URL = "https://api.github.com"
# Classic projects are still served behind the inertia preview media type
PROJECTS_ACCEPT = "application/vnd.github.inertia-preview+json"
PAGE_SIZE = 100
REQUEST_TIMEOUT = 20


def iter_pages(
    fetch_page: Callable[[int, int], list[Any]],
    per_page: int = PAGE_SIZE,
) -> Iterator[list[Any]]:
    """
    Yield successive pages from ``fetch_page(page, per_page)``.

    Pages are numbered from 1. Iteration stops after the first page holding
    fewer than ``per_page`` items, so a listing of exactly ``per_page`` items
    costs one extra (empty) request.
    """
    page = 1
    while True:
        items = fetch_page(page, per_page)
        yield items
        if len(items) < per_page:
            return
        page += 1


def collect_pages(
    fetch_page: Callable[[int, int], list[Any]],
    per_page: int = PAGE_SIZE,
) -> list[Any]:
    """Flatten every page from ``iter_pages`` into a single list."""
    result: list[Any] = []
    for items in iter_pages(fetch_page, per_page):
        result.extend(items)
    return result


class GitHubClient:
    """
    Minimal GitHub client bound to one repository.

    All methods raise ``requests.RequestException`` (``HTTPError`` for non-2xx
    responses); callers translate those into the package's own errors.
    """

    def __init__(
        self,
        token: str,
        owner: str,
        repo: str,
        base_url: str = DEFAULT_API_URL,
        session: Optional[requests.Session] = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            token: GitHub token with access to the repository's projects
            owner: Repository owner (user or organization)
            repo: Repository name
            base_url: API root, for GitHub Enterprise
            session: Pre-built session, mainly for tests
        """
        self.owner = owner
        self.repo = repo
        self.base_url = base_url.rstrip('/')
        self.session = session if session is not None else requests.Session()
        self.session.headers.update({
            'Authorization': f'token {token}',
            'Accept': PROJECTS_ACCEPT,
        })

    def _get(self, path: str, params: Optional[dict[str, Any]] = None) -> Any:
        response = self.session.get(f"{self.base_url}{path}", params=params, timeout=REQUEST_TIMEOUT)
        response.raise_for_status()
        return response.json()

    def _post(self, path: str, payload: dict[str, Any]) -> Any:
        response = self.session.post(f"{self.base_url}{path}", json=payload, timeout=REQUEST_TIMEOUT)
        response.raise_for_status()
        if response.content:
            return response.json()
        return None

    def list_cards(self, column_id: int, page: int = 1, per_page: int = PAGE_SIZE) -> list[dict[str, Any]]:
        """List one page of non-archived cards in a column."""
        logging.debug("Fetching cards of column %s (page %d)", column_id, page)
        return self._get(
            f"/projects/columns/{column_id}/cards",
            params={
                'archived_state': 'not_archived',
                'per_page': per_page,
                'page': page,
            },
        )

    def list_projects(self, page: int = 1, per_page: int = PAGE_SIZE) -> list[dict[str, Any]]:
        """List one page of the repository's projects."""
        return self._get(
            f"/repos/{self.owner}/{self.repo}/projects",
            params={'per_page': per_page, 'page': page},
        )

    def list_columns(self, project_id: int, page: int = 1, per_page: int = PAGE_SIZE) -> list[dict[str, Any]]:
        """List one page of a project's columns."""
        return self._get(
            f"/projects/{project_id}/columns",
            params={'per_page': per_page, 'page': page},
        )

    def add_labels(self, issue_number: int, labels: list[str]) -> Any:
        """
        Add labels to an issue, keeping any it already has.

        Returns:
            The issue's resulting labels as returned by the API
        """
        return self._post(
            f"/repos/{self.owner}/{self.repo}/issues/{issue_number}/labels",
            {'labels': list(labels)},
        )

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "GitHubClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
