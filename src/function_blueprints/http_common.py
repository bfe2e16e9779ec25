import json
from typing import Any, Callable, Optional

import azure.functions as func
from pydantic import BaseModel

from src.shared.logging_utils import exception as log_exception, info as log_info
from src.specs.common.errors import (
    ConflictError,
    ContentCalendarError,
    NotFoundError,
    ValidationError,
)
from src.specs.models.http import ErrorResponse


def json_response(body: Any, status_code: int = 200) -> func.HttpResponse:
    if isinstance(body, BaseModel):
        payload = body.model_dump_json()
    elif isinstance(body, list):
        payload = "[" + ",".join(
            item.model_dump_json() if isinstance(item, BaseModel) else json.dumps(item)
            for item in body
        ) + "]"
    else:
        payload = json.dumps(body)
    return func.HttpResponse(
        body=payload,
        mimetype="application/json",
        status_code=status_code,
    )


def error_response(message: str, status_code: int, code: Optional[str] = None) -> func.HttpResponse:
    err = ErrorResponse(error=message, errorCode=code)
    return json_response(err, status_code)


def run_handler(
    project_id: Optional[str],
    event: str,
    failure_message: str,
    handler: Callable[[], func.HttpResponse],
) -> func.HttpResponse:
    """Run `handler`, turning application errors into 4xx and anything else into a generic 500."""
    try:
        return handler()
    except ValidationError as exc:
        log_info(project_id, f"{event}:invalid", error=str(exc))
        return error_response(str(exc), exc.http_status, exc.code)
    except NotFoundError as exc:
        log_info(project_id, f"{event}:not_found")
        return error_response("Not found", exc.http_status, exc.code)
    except ConflictError as exc:
        log_info(project_id, f"{event}:conflict", error=str(exc))
        return error_response("Content changed concurrently, reload and retry", exc.http_status, exc.code)
    except ContentCalendarError as exc:
        log_exception(project_id, f"{event}:failed", code=exc.code)
        return error_response(failure_message, 500, exc.code)
    except Exception:
        log_exception(project_id, f"{event}:failed")
        return error_response(failure_message, 500)
