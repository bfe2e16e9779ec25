"""Shared fixtures: a file-backed store per test and repositories over it."""

import pytest

from src.repositories.content_repository import ContentRepository
from src.repositories.project_repository import ProjectRepository
from src.shared.document_store import FileDocumentStore
from tests.helpers import LocalProjectSource


@pytest.fixture
def store(tmp_path):
    """A fresh JSON-file document store under the test's tmp dir."""
    return FileDocumentStore(str(tmp_path / "store"))


@pytest.fixture
def project_repo(store):
    return ProjectRepository(store)


@pytest.fixture
def content_repo(store):
    return ContentRepository(store)


@pytest.fixture
def launch_project(project_repo):
    """An Instagram project with no content."""
    return project_repo.create_project("Launch", "Instagram")


@pytest.fixture
def local_source(project_repo, content_repo):
    return LocalProjectSource(project_repo, content_repo)
