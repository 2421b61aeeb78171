from __future__ import annotations

from typing import Any

import pytest
import requests

from column_labeler.config import Config
from column_labeler.exceptions import ConfigurationError, FetchError, InvalidInputError
from column_labeler.resolver import find_column, find_project, resolve_column_id, resolve_targets


class MockClient:
    def __init__(
        self,
        projects: list[dict[str, Any]],
        columns: dict[int, list[dict[str, Any]]],
        fail_projects: bool = False,
    ) -> None:
        self.projects = projects
        self.columns = columns
        self.fail_projects = fail_projects
        self.column_calls: list[int] = []

    def list_projects(self, page: int = 1, per_page: int = 100) -> list[dict[str, Any]]:
        if self.fail_projects:
            raise requests.ConnectionError("connection reset")
        start = (page - 1) * per_page
        return self.projects[start:start + per_page]

    def list_columns(self, project_id: int, page: int = 1, per_page: int = 100) -> list[dict[str, Any]]:
        self.column_calls.append(project_id)
        start = (page - 1) * per_page
        return self.columns.get(project_id, [])[start:start + per_page]


def sample_client() -> MockClient:
    return MockClient(
        projects=[
            {"id": 1, "name": "Roadmap"},
            {"id": 2, "name": "Bugs"},
            {"id": 3, "name": "Roadmap"},
        ],
        columns={
            1: [{"id": 11, "name": "To do"}, {"id": 12, "name": "Done"}, {"id": 13, "name": "Done"}],
            2: [{"id": 21, "name": "Triage"}],
            3: [{"id": 31, "name": "Done"}],
        },
    )


def config(**kwargs: Any) -> Config:
    kwargs.setdefault("token", "t")
    kwargs.setdefault("owner", "octo")
    kwargs.setdefault("repo", "repo")
    return Config(**kwargs)


class TestLookups:
    def test_first_project_with_matching_name_wins(self) -> None:
        project = find_project(sample_client(), "Roadmap")
        assert project is not None
        assert project.id == 1

    def test_missing_project_is_none_not_error(self) -> None:
        assert find_project(sample_client(), "Nope") is None

    def test_name_match_is_exact(self) -> None:
        assert find_project(sample_client(), "roadmap") is None
        assert find_project(sample_client(), "Roadmap ") is None

    def test_first_column_with_matching_name_wins(self) -> None:
        column = find_column(sample_client(), 1, "Done")
        assert column is not None
        assert column.id == 12

    def test_missing_column_is_none(self) -> None:
        assert find_column(sample_client(), 2, "Done") is None

    def test_projects_are_searched_across_pages(self) -> None:
        projects = [{"id": i, "name": f"P{i}"} for i in range(1, 151)]
        client = MockClient(projects=projects, columns={})
        project = find_project(client, "P140")
        assert project is not None
        assert project.id == 140

    def test_listing_failure_raises_fetch_error(self) -> None:
        client = MockClient(projects=[], columns={}, fail_projects=True)
        with pytest.raises(FetchError):
            find_project(client, "Roadmap")

    def test_resolve_column_id(self) -> None:
        assert resolve_column_id(sample_client(), "Bugs", "Triage") == 21

    def test_resolve_column_id_stops_when_project_missing(self) -> None:
        client = sample_client()
        assert resolve_column_id(client, "Nope", "Triage") is None
        assert client.column_calls == []


class TestResolveTargets:
    def test_column_id_is_used_directly(self) -> None:
        client = sample_client()
        targets = resolve_targets(client, config(label_to_add="triage", column_id="77"))

        assert [(t.column_id, t.labels) for t in targets] == [(77, ("triage",))]
        assert client.column_calls == []

    def test_invalid_column_id_is_rejected(self) -> None:
        with pytest.raises(InvalidInputError):
            resolve_targets(sample_client(), config(label_to_add="triage", column_id="0"))

    def test_column_resolved_by_name(self) -> None:
        targets = resolve_targets(
            sample_client(),
            config(label_to_add="triage", project_name="Bugs", column_name="Triage"),
        )
        assert targets[0].column_id == 21

    def test_unresolved_column_is_configuration_error(self) -> None:
        with pytest.raises(ConfigurationError, match="Could not find column"):
            resolve_targets(
                sample_client(),
                config(label_to_add="triage", project_name="Bugs", column_name="Done"),
            )

    def test_columns_labels_mixes_ids_and_names(self) -> None:
        raw = (
            '[{"column_id": 5, "labels": ["a"]},'
            ' {"column_name": "Done", "labels": ["b", "c"]},'
            ' {"labels": []}]'
        )
        targets = resolve_targets(sample_client(), config(project_name="Roadmap", columns_labels=raw))

        assert [(t.column_id, t.labels) for t in targets] == [(5, ("a",)), (12, ("b", "c"))]

    def test_columns_labels_by_name_needs_project(self) -> None:
        raw = '[{"column_name": "Done", "labels": ["b"]}]'
        with pytest.raises(ConfigurationError, match="project_name"):
            resolve_targets(sample_client(), config(columns_labels=raw))

    def test_columns_labels_without_usable_entries(self) -> None:
        with pytest.raises(ConfigurationError, match="no usable entries"):
            resolve_targets(sample_client(), config(columns_labels='[{"labels": []}, 3]'))
