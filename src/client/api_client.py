"""
HTTP client for the content calendar API.
"""
import os
from typing import Any, Dict, Iterable, List, Optional, Union

import requests

from src.specs.common.enums import Platform
from src.specs.common.errors import (
    ConflictError,
    NotFoundError,
    StoreError,
    ValidationError,
)
from src.specs.models.domain import ContentDocument, ContentDraft, ContentUpdate, ProjectDocument

DEFAULT_API_URL = "http://localhost:7071/api"


class ProjectsApiClient:
    """Blocking client; every call runs to completion and nothing is retried."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: float = 10,
    ):
        base = base_url or os.getenv("CONTENT_CALENDAR_API_URL", DEFAULT_API_URL)
        self.base_url = base.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def _request(self, method: str, path: str, json_body: Any = None, params: Optional[Dict[str, str]] = None) -> requests.Response:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(
                method,
                url,
                json=json_body,
                params=params,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise StoreError(f"{method} {path} failed: {exc}") from exc
        if response.status_code >= 400:
            self._raise_for_status(response, path)
        return response

    @staticmethod
    def _raise_for_status(response: requests.Response, path: str) -> None:
        try:
            body = response.json()
        except ValueError:
            body = {}
        message = body.get("error") if isinstance(body, dict) else None
        message = message or f"HTTP {response.status_code} for {path}"
        status = response.status_code
        if status == 400:
            raise ValidationError(message)
        if status == 404:
            raise NotFoundError("Project", path.split("/")[2] if path.count("/") >= 2 else path)
        if status == 409:
            raise ConflictError(message)
        raise StoreError(message, details={"status": status})

    def list_projects(self) -> List[ProjectDocument]:
        data = self._request("GET", "/projects").json()
        return [ProjectDocument.model_validate(item) for item in data]

    def get_project(self, project_id: str) -> ProjectDocument:
        data = self._request("GET", f"/projects/{project_id}").json()
        return ProjectDocument.model_validate(data)

    def create_project(
        self,
        name: str,
        platform: Union[Platform, str],
        description: Optional[str] = None,
        contents: Optional[Iterable[ContentDraft]] = None,
    ) -> ProjectDocument:
        body: Dict[str, Any] = {
            "name": name,
            "platform": platform.value if isinstance(platform, Platform) else platform,
        }
        if description:
            body["description"] = description
        if contents:
            body["contents"] = [draft.model_dump(mode="json") for draft in contents]
        data = self._request("POST", "/projects", json_body=body).json()
        return ProjectDocument.model_validate(data)

    def delete_project(self, project_id: str) -> None:
        self._request("DELETE", f"/projects/{project_id}")

    def add_content(self, project_id: str, draft: ContentDraft) -> ContentDocument:
        body = {"action": "addContent", "content": draft.model_dump(mode="json")}
        data = self._request("PUT", f"/projects/{project_id}", json_body=body).json()
        return ContentDocument.model_validate(data["content"])

    def update_content(self, project_id: str, content_id: str, updates: ContentUpdate) -> bool:
        body = {"action": "updateContent", "contentId": content_id, "updates": updates.changes()}
        data = self._request("PUT", f"/projects/{project_id}", json_body=body).json()
        return bool(data.get("matched", True))

    def remove_content(self, project_id: str, content_id: str) -> bool:
        body = {"action": "deleteContent", "contentId": content_id}
        data = self._request("PUT", f"/projects/{project_id}", json_body=body).json()
        return bool(data.get("matched", True))

    def export_csv(self, project_id: str, search: str = "", status: str = "All") -> str:
        params = {"search": search, "status": status}
        return self._request("GET", f"/projects/{project_id}/export", params=params).text

    def ping(self) -> bool:
        try:
            self._request("GET", "/health")
            return True
        except StoreError:
            return False
