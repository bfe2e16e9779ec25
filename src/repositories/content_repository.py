"""
Content-mutation repository.

Each mutation is a single patch of the parent project document. Update and
remove first locate the item's array index, then patch that index with a
precondition that the item there still carries the same id, so a concurrent
reorder of the array fails with ConflictError instead of touching the wrong
item.
"""
from typing import Any, Dict, List, Optional, Union

from src.shared.document_store import DocumentStore, PatchCondition, get_document_store
from src.shared.logging_utils import info as log_info, warning as log_warning
from src.specs.common.errors import NotFoundError, ValidationError
from src.specs.common.ids import is_valid_id
from src.specs.common.validation import validate_model
from src.specs.models.domain import ContentDocument, ContentDraft, ContentUpdate


def _index_of(project: Dict[str, Any], content_id: str) -> Optional[int]:
    for index, item in enumerate(project.get("contents") or []):
        if isinstance(item, dict) and item.get("id") == content_id:
            return index
    return None


class ContentRepository:
    def __init__(self, store: Optional[DocumentStore] = None):
        self._store = store if store is not None else get_document_store()

    def _load(self, project_id: Any) -> Dict[str, Any]:
        if not is_valid_id(project_id):
            raise NotFoundError("Project", str(project_id))
        project = self._store.read_item(project_id)
        if project is None:
            raise NotFoundError("Project", project_id)
        return project

    def _patch(self, project_id: str, operations: List[Dict[str, Any]], condition: PatchCondition) -> None:
        if self._store.patch_item(project_id, operations, condition) is None:
            raise NotFoundError("Project", project_id)

    def ensure_project(self, project_id: Any) -> None:
        """Raise NotFoundError unless the project exists."""
        self._load(project_id)

    def add_content(self, project_id: Any, draft: Union[ContentDraft, dict]) -> ContentDocument:
        """Append a new item to the end of the project's contents.

        An absent project is reported as NotFoundError even when the draft is
        also invalid.
        """
        if not is_valid_id(project_id):
            raise NotFoundError("Project", str(project_id))
        try:
            draft = validate_model(ContentDraft, draft, "Invalid content")
        except ValidationError:
            self._load(project_id)
            raise
        content = draft.with_id()
        patched = self._store.patch_item(
            project_id,
            [{"op": "add", "path": "/contents/-", "value": content.model_dump(mode="json")}],
        )
        if patched is None:
            raise NotFoundError("Project", project_id)
        log_info(project_id, "content:add", contentId=content.id)
        return content

    def update_content(
        self,
        project_id: Any,
        content_id: str,
        updates: Union[ContentUpdate, dict],
    ) -> bool:
        """
        Apply a partial update to one content item.

        Returns:
            True if the item was found, False if no item has `content_id`
            (the call is then a no-op)

        Raises:
            NotFoundError: If the project does not exist
            ConflictError: If the item moved between lookup and patch
        """
        project = self._load(project_id)
        updates = validate_model(ContentUpdate, updates, "Invalid content updates")
        index = _index_of(project, content_id)
        if index is None:
            log_warning(project_id, "content:update_unmatched", contentId=content_id)
            return False
        changes = updates.changes()
        if changes:
            operations = [
                {"op": "set", "path": f"/contents/{index}/{field}", "value": value}
                for field, value in changes.items()
            ]
            self._patch(project_id, operations, PatchCondition(f"/contents/{index}/id", content_id))
        log_info(project_id, "content:update", contentId=content_id, fields=sorted(changes))
        return True

    def remove_content(self, project_id: Any, content_id: str) -> bool:
        """Remove one content item; False (no-op) if no item has `content_id`."""
        project = self._load(project_id)
        index = _index_of(project, content_id)
        if index is None:
            log_warning(project_id, "content:remove_unmatched", contentId=content_id)
            return False
        self._patch(
            project_id,
            [{"op": "remove", "path": f"/contents/{index}"}],
            PatchCondition(f"/contents/{index}/id", content_id),
        )
        log_info(project_id, "content:remove", contentId=content_id)
        return True
