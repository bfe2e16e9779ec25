from typing import Optional

import azure.functions as func

from src.function_blueprints.http_common import json_response
from src.shared.document_store import DocumentStore, get_document_store
from src.shared.logging_utils import error as log_error
from src.specs.common.errors import ContentCalendarError
from src.specs.models.http import HealthResponse


bp = func.Blueprint()


def check_health(store: Optional[DocumentStore] = None) -> func.HttpResponse:
    try:
        store = store if store is not None else get_document_store()
    except ContentCalendarError as exc:
        log_error(None, "health:store_unavailable", error=str(exc))
        return json_response(HealthResponse(success=False, message="Store not configured"), 503)

    if not store.ping():
        log_error(None, "health:ping_failed", backend=store.backend)
        resp = HealthResponse(success=False, message="Store unreachable", backend=store.backend)
        return json_response(resp, 503)
    return json_response(HealthResponse(message="Connected to project store", backend=store.backend))


@bp.function_name(name="health")
@bp.route(route="health", methods=["GET"], auth_level=func.AuthLevel.ANONYMOUS)
def health(req: func.HttpRequest) -> func.HttpResponse:
    return check_health()
