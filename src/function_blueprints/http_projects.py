from typing import Optional

import azure.functions as func

from src.function_blueprints.http_common import json_response, run_handler
from src.repositories.project_repository import ProjectRepository
from src.shared.logging_utils import info as log_info
from src.specs.common.validation import validate_model
from src.specs.models.domain import ProjectCreate


bp = func.Blueprint()


def list_projects(repo: Optional[ProjectRepository] = None) -> func.HttpResponse:
    def _list() -> func.HttpResponse:
        projects = (repo or ProjectRepository()).list_projects()
        log_info(None, "projects:list", count=len(projects))
        return json_response(projects)

    return run_handler(None, "projects:list", "Failed to fetch projects", _list)


def create_project(req: func.HttpRequest, repo: Optional[ProjectRepository] = None) -> func.HttpResponse:
    def _create() -> func.HttpResponse:
        # an unparseable body is a server-side failure, not a validation error
        data = req.get_json()
        payload = validate_model(ProjectCreate, data, "Name and platform are required")
        project = (repo or ProjectRepository()).create_from_payload(payload)
        return json_response(project, 201)

    return run_handler(None, "projects:create", "Failed to create project", _create)


@bp.function_name(name="projects")
@bp.route(route="projects", methods=["GET", "POST"], auth_level=func.AuthLevel.ANONYMOUS)
def projects(req: func.HttpRequest) -> func.HttpResponse:
    if req.method.upper() == "POST":
        return create_project(req)
    return list_projects()
