"""Tests for ProjectRepository over the file-backed store."""

from datetime import datetime, timezone

import pytest

from src.repositories.project_repository import ProjectRepository
from src.specs.common.enums import ContentStatus, Platform
from src.specs.common.errors import NotFoundError, StoreError, ValidationError
from src.specs.common.ids import is_valid_id
from tests.helpers import make_draft


class TestCreateProject:
    """Tests for ProjectRepository.create_project."""

    def test_assigns_id_and_created_at(self, project_repo):
        before = datetime.now(timezone.utc)
        project = project_repo.create_project("Launch", "Instagram", "Spring launch")

        assert is_valid_id(project.id)
        assert project.platform is Platform.INSTAGRAM
        assert project.description == "Spring launch"
        assert project.contents == []
        assert project.createdAt >= before.replace(microsecond=0)

    def test_persists_to_store(self, project_repo, store):
        project = project_repo.create_project("Launch", Platform.TIKTOK)

        stored = store.read_item(project.id)
        assert stored["name"] == "Launch"
        assert stored["platform"] == "TikTok"
        assert stored["contents"] == []

    def test_initial_contents_get_distinct_ids(self, project_repo):
        project = project_repo.create_project(
            "Launch",
            "Facebook",
            initial_contents=[make_draft(1), {"publishDate": "2024-01-02T00:00:00Z", "copy": "b"}],
        )

        ids = [c.id for c in project.contents]
        assert len(set(ids)) == 2
        assert all(is_valid_id(i) for i in ids)
        assert project.contents[1].copyText == "b"
        assert project.contents[1].status is ContentStatus.DRAFT

    @pytest.mark.parametrize(
        "name,platform",
        [(None, "Instagram"), ("", "Instagram"), ("  ", "Instagram"), ("Launch", None), ("Launch", "Myspace")],
    )
    def test_rejects_missing_fields(self, project_repo, store, name, platform):
        with pytest.raises(ValidationError) as excinfo:
            project_repo.create_project(name, platform)

        assert str(excinfo.value) == "Name and platform are required"
        assert excinfo.value.details["errors"]
        assert store.list_items() == []

    def test_two_projects_get_different_ids(self, project_repo):
        first = project_repo.create_project("A", "Instagram")
        second = project_repo.create_project("A", "Instagram")
        assert first.id != second.id


class TestReadAndDelete:
    """Tests for get, list and delete."""

    def test_get_round_trips(self, project_repo, launch_project):
        fetched = project_repo.get_project(launch_project.id)
        assert fetched == launch_project

    @pytest.mark.parametrize("project_id", ["f" * 32, "not-an-id", "", None, "A" * 32])
    def test_get_unknown_or_malformed_is_not_found(self, project_repo, project_id):
        with pytest.raises(NotFoundError) as excinfo:
            project_repo.get_project(project_id)
        assert excinfo.value.http_status == 404

    def test_list_returns_every_project(self, project_repo):
        names = {project_repo.create_project(n, "TikTok").name for n in ("a", "b", "c")}
        assert {p.name for p in project_repo.list_projects()} == names

    def test_list_empty(self, project_repo):
        assert project_repo.list_projects() == []

    def test_delete_removes_project_and_contents(self, project_repo, content_repo, launch_project):
        content_repo.add_content(launch_project.id, make_draft())

        project_repo.delete_project(launch_project.id)

        assert project_repo.list_projects() == []
        with pytest.raises(NotFoundError):
            project_repo.get_project(launch_project.id)

    def test_delete_unknown(self, project_repo):
        with pytest.raises(NotFoundError):
            project_repo.delete_project("f" * 32)

    def test_store_failure_propagates(self, store, monkeypatch):
        def broken():
            raise StoreError("store offline")

        monkeypatch.setattr(store, "list_items", broken)
        with pytest.raises(StoreError):
            ProjectRepository(store).list_projects()
