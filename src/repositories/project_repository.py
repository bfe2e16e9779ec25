"""
Project repository: whole-document operations on project calendars.
"""
from typing import Any, Iterable, List, Optional, Union

from src.shared.document_store import DocumentStore, get_document_store
from src.shared.logging_utils import info as log_info
from src.specs.common.datetime_utils import utc_now
from src.specs.common.enums import Platform
from src.specs.common.errors import NotFoundError
from src.specs.common.ids import is_valid_id, new_id
from src.specs.common.validation import validate_model
from src.specs.models.domain import ContentDraft, ProjectCreate, ProjectDocument


class ProjectRepository:
    def __init__(self, store: Optional[DocumentStore] = None):
        self._store = store if store is not None else get_document_store()

    def create_project(
        self,
        name: Optional[str],
        platform: Union[Platform, str, None],
        description: Optional[str] = None,
        initial_contents: Optional[Iterable[Union[ContentDraft, dict]]] = None,
    ) -> ProjectDocument:
        """
        Create a project, assigning its id and createdAt server side.

        Args:
            name: Project name, must not be blank
            platform: One of the supported platforms
            description: Optional free text
            initial_contents: Optional content drafts; each receives a fresh id

        Raises:
            ValidationError: If name or platform is missing or invalid
            StoreError: If the store rejects the write
        """
        payload = validate_model(
            ProjectCreate,
            {
                "name": name,
                "platform": platform,
                "description": description,
                "contents": list(initial_contents or []),
            },
            "Name and platform are required",
        )
        return self.create_from_payload(payload)

    def create_from_payload(self, payload: ProjectCreate) -> ProjectDocument:
        project = ProjectDocument(
            id=new_id(),
            name=payload.name,
            description=payload.description,
            platform=payload.platform,
            createdAt=utc_now(),
            contents=[draft.with_id() for draft in payload.contents],
        )
        stored = self._store.create_item(project.model_dump(mode="json"))
        log_info(
            project.id,
            "projects:create",
            platform=project.platform.value,
            contents=len(project.contents),
        )
        return ProjectDocument.model_validate(stored)

    def get_project(self, project_id: Any) -> ProjectDocument:
        """Malformed ids resolve to NotFoundError like unknown ones."""
        if not is_valid_id(project_id):
            raise NotFoundError("Project", str(project_id))
        item = self._store.read_item(project_id)
        if item is None:
            raise NotFoundError("Project", project_id)
        return ProjectDocument.model_validate(item)

    def list_projects(self) -> List[ProjectDocument]:
        return [ProjectDocument.model_validate(item) for item in self._store.list_items()]

    def delete_project(self, project_id: Any) -> None:
        """Delete the project document, and with it every embedded content item."""
        if not is_valid_id(project_id) or not self._store.delete_item(project_id):
            raise NotFoundError("Project", str(project_id))
        log_info(project_id, "projects:delete")
