import logging
from typing import Any, Dict, Optional


_LOGGER = logging.getLogger("contentcalendar")


def log(level: int, project_id: Optional[str], message: str, **dimensions: Any) -> None:
    dims: Dict[str, Any] = {"projectId": project_id} if project_id else {}
    dims.update(dimensions)
    _LOGGER.log(level, message, extra={"custom_dimensions": dims})


def info(project_id: Optional[str], message: str, **dimensions: Any) -> None:
    log(logging.INFO, project_id, message, **dimensions)


def warning(project_id: Optional[str], message: str, **dimensions: Any) -> None:
    log(logging.WARNING, project_id, message, **dimensions)


def error(project_id: Optional[str], message: str, **dimensions: Any) -> None:
    log(logging.ERROR, project_id, message, **dimensions)


def exception(project_id: Optional[str], message: str, **dimensions: Any) -> None:
    """Log at ERROR with the active exception's traceback attached."""
    dims: Dict[str, Any] = {"projectId": project_id} if project_id else {}
    dims.update(dimensions)
    _LOGGER.exception(message, extra={"custom_dimensions": dims})
