from typing import Optional

import azure.functions as func

from src.function_blueprints.http_common import error_response, json_response, run_handler
from src.repositories.content_repository import ContentRepository
from src.repositories.project_repository import ProjectRepository
from src.shared.logging_utils import info as log_info
from src.specs.common.errors import ValidationError
from src.specs.common.validation import validate_model
from src.specs.models.http import (
    CONTENT_ACTIONS,
    AddContentAction,
    AddContentResponse,
    ContentAction,
    ContentMutationResponse,
    SuccessResponse,
    UpdateContentAction,
)


bp = func.Blueprint()


def get_project(project_id: str, repo: Optional[ProjectRepository] = None) -> func.HttpResponse:
    def _get() -> func.HttpResponse:
        project = (repo or ProjectRepository()).get_project(project_id)
        return json_response(project)

    return run_handler(project_id, "projects:get", "Failed to fetch project", _get)


def update_project(
    req: func.HttpRequest,
    project_id: str,
    repo: Optional[ContentRepository] = None,
) -> func.HttpResponse:
    """Dispatch a content action: addContent, updateContent or deleteContent."""

    def _update() -> func.HttpResponse:
        data = req.get_json()
        action = data.get("action") if isinstance(data, dict) else None
        model = CONTENT_ACTIONS.get(action) if isinstance(action, str) else None
        if model is None:
            log_info(project_id, "projects:update:invalid_action", action=str(action))
            return error_response("Invalid action", 400, "INVALID_ACTION")

        contents = repo or ContentRepository()
        try:
            parsed: ContentAction = validate_model(model, data, f"Invalid {action} request")
        except ValidationError:
            # an absent project wins over a bad body
            contents.ensure_project(project_id)
            raise
        if isinstance(parsed, AddContentAction):
            content = contents.add_content(project_id, parsed.content)
            return json_response(AddContentResponse(content=content))
        if isinstance(parsed, UpdateContentAction):
            matched = contents.update_content(project_id, parsed.contentId, parsed.updates)
        else:
            matched = contents.remove_content(project_id, parsed.contentId)
        return json_response(ContentMutationResponse(matched=matched))

    return run_handler(project_id, "projects:update", "Failed to update project", _update)


def delete_project(project_id: str, repo: Optional[ProjectRepository] = None) -> func.HttpResponse:
    def _delete() -> func.HttpResponse:
        (repo or ProjectRepository()).delete_project(project_id)
        return json_response(SuccessResponse())

    return run_handler(project_id, "projects:delete", "Failed to delete project", _delete)


@bp.function_name(name="project_item")
@bp.route(route="projects/{id}", methods=["GET", "PUT", "DELETE"], auth_level=func.AuthLevel.ANONYMOUS)
def project_item(req: func.HttpRequest) -> func.HttpResponse:
    project_id = req.route_params.get("id", "")
    method = req.method.upper()
    if method == "PUT":
        return update_project(req, project_id)
    if method == "DELETE":
        return delete_project(project_id)
    return get_project(project_id)
