import re
from typing import Optional

import azure.functions as func

from src.function_blueprints.http_common import run_handler
from src.repositories.project_repository import ProjectRepository
from src.shared.logging_utils import info as log_info
from src.specs.common.enums import ContentStatus
from src.specs.common.errors import ValidationError
from src.views.csv_export import export_csv, export_filename
from src.views.filters import ALL, filter_contents, sort_by_publish_date


bp = func.Blueprint()

_STATUS_VALUES = {ALL} | {status.value for status in ContentStatus}


def _safe_filename(name: str) -> str:
    return re.sub(r'[\\/:*?"<>|\r\n]+', "_", name)


def export_project(
    req: func.HttpRequest,
    project_id: str,
    repo: Optional[ProjectRepository] = None,
) -> func.HttpResponse:
    """CSV of the project's content, filtered like the dashboard table and sorted by date."""

    def _export() -> func.HttpResponse:
        search = req.params.get("search", "")
        status = req.params.get("status", ALL)
        if status not in _STATUS_VALUES:
            raise ValidationError(f"Unknown status filter '{status}'")
        project = (repo or ProjectRepository()).get_project(project_id)
        rows = sort_by_publish_date(filter_contents(project.contents, search, status))
        log_info(project_id, "projects:export", rows=len(rows))
        return func.HttpResponse(
            body=export_csv(rows),
            mimetype="text/csv",
            status_code=200,
            headers={
                "Content-Disposition": f'attachment; filename="{_safe_filename(export_filename(project))}"'
            },
        )

    return run_handler(project_id, "projects:export", "Failed to export project", _export)


@bp.function_name(name="project_export")
@bp.route(route="projects/{id}/export", methods=["GET"], auth_level=func.AuthLevel.ANONYMOUS)
def project_export(req: func.HttpRequest) -> func.HttpResponse:
    return export_project(req, req.route_params.get("id", ""))
