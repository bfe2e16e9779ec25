"""Builders and fakes shared by the unit tests."""

import json
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import azure.functions as func

from src.repositories.content_repository import ContentRepository
from src.repositories.project_repository import ProjectRepository
from src.specs.common.errors import StoreError
from src.specs.models.domain import ContentDraft, ContentUpdate, ProjectDocument


def make_draft(day: int = 10, copy: str = "teaser", **fields: Any) -> ContentDraft:
    return ContentDraft(
        publishDate=datetime(2024, 1, day, tzinfo=timezone.utc),
        copy=copy,
        **fields,
    )


def make_request(
    method: str,
    url: str = "/api/projects",
    body: Any = None,
    route_params: Optional[Dict[str, str]] = None,
    params: Optional[Dict[str, str]] = None,
    raw_body: Optional[bytes] = None,
) -> func.HttpRequest:
    if raw_body is None:
        raw_body = json.dumps(body).encode("utf-8") if body is not None else b""
    return func.HttpRequest(
        method=method,
        url=url,
        body=raw_body,
        route_params=route_params or {},
        params=params or {},
    )


def response_json(resp: func.HttpResponse) -> Any:
    return json.loads(resp.get_body().decode("utf-8"))


class LocalProjectSource:
    """ProjectSource backed directly by the repositories, counting list calls."""

    def __init__(self, project_repo: ProjectRepository, content_repo: ContentRepository):
        self.projects = project_repo
        self.contents = content_repo
        self.list_calls = 0
        self.fail_list = False
        self.fail_create = False
        self.fail_delete = False

    def list_projects(self) -> List[ProjectDocument]:
        self.list_calls += 1
        if self.fail_list:
            raise StoreError("store offline")
        return self.projects.list_projects()

    def create_project(self, name, platform, description=None):
        if self.fail_create:
            raise StoreError("store offline")
        return self.projects.create_project(name, platform, description)

    def delete_project(self, project_id):
        if self.fail_delete:
            raise StoreError("store offline")
        self.projects.delete_project(project_id)

    def add_content(self, project_id, draft: ContentDraft):
        return self.contents.add_content(project_id, draft)

    def update_content(self, project_id, content_id, updates: ContentUpdate):
        return self.contents.update_content(project_id, content_id, updates)

    def remove_content(self, project_id, content_id):
        return self.contents.remove_content(project_id, content_id)
