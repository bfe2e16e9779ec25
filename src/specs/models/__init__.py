from __future__ import annotations

from typing import Dict, Type

from pydantic import BaseModel

from .http import (
    AddContentAction,
    UpdateContentAction,
    DeleteContentAction,
    ContentAction,
    CONTENT_ACTIONS,
    SuccessResponse,
    ContentMutationResponse,
    AddContentResponse,
    HealthResponse,
    ErrorResponse,
)
from .domain import (
    ContentDraft,
    ContentDocument,
    ContentUpdate,
    ProjectCreate,
    ProjectDocument,
)


# Registry mapping output schema filenames to models for generation
SCHEMA_MODELS: Dict[str, Type[BaseModel]] = {
    "project.document.schema.json": ProjectDocument,
    "project.create.schema.json": ProjectCreate,
    "content.document.schema.json": ContentDocument,
    "content.draft.schema.json": ContentDraft,
    "content.update.schema.json": ContentUpdate,
    "content.add.request.schema.json": AddContentAction,
    "content.update.request.schema.json": UpdateContentAction,
    "content.delete.request.schema.json": DeleteContentAction,
    "content.add.response.schema.json": AddContentResponse,
    "content.mutation.response.schema.json": ContentMutationResponse,
    "success.response.schema.json": SuccessResponse,
    "health.response.schema.json": HealthResponse,
    "error.response.schema.json": ErrorResponse,
}

__all__ = [
    "AddContentAction",
    "UpdateContentAction",
    "DeleteContentAction",
    "ContentAction",
    "CONTENT_ACTIONS",
    "SuccessResponse",
    "ContentMutationResponse",
    "AddContentResponse",
    "HealthResponse",
    "ErrorResponse",
    "ContentDraft",
    "ContentDocument",
    "ContentUpdate",
    "ProjectCreate",
    "ProjectDocument",
    "SCHEMA_MODELS",
]
