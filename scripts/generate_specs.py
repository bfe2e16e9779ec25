#!/usr/bin/env python3
"""
Generate JSON Schemas, YAML variants, and OpenAPI from Pydantic models.

Outputs under src/specs/ (or the directory given as the first argument):
 - schemas/*.json (and *.yaml)
 - openapi.yaml and openapi.json
"""
from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Optional

try:
    import yaml  # type: ignore
except ImportError:  # pragma: no cover
    print("PyYAML is required: pip install pyyaml", file=sys.stderr)
    raise

from pydantic.json_schema import models_json_schema


ROOT = Path(__file__).resolve().parents[1]
SPECS = ROOT / "src" / "specs"

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from src.specs.models import (  # noqa: E402
    SCHEMA_MODELS,
    AddContentAction,
    AddContentResponse,
    ContentMutationResponse,
    DeleteContentAction,
    ErrorResponse,
    HealthResponse,
    ProjectCreate,
    ProjectDocument,
    SuccessResponse,
    UpdateContentAction,
)

_REF = "#/components/schemas/{model}"


def write_json_yaml(obj: dict, json_path: Path) -> None:
    json_path.parent.mkdir(parents=True, exist_ok=True)
    with json_path.open("w", encoding="utf-8") as f:
        json.dump(obj, f, indent=2, ensure_ascii=False)
    yaml_path = json_path.with_suffix(".yaml")
    with yaml_path.open("w", encoding="utf-8") as f:
        yaml.safe_dump(obj, f, sort_keys=False)


def generate_model_schemas(specs_dir: Path = SPECS) -> None:
    for filename, model in SCHEMA_MODELS.items():
        schema = model.model_json_schema(by_alias=True)
        write_json_yaml(schema, specs_dir / "schemas" / filename)


def _json(ref: str, description: str) -> dict:
    return {
        "description": description,
        "content": {"application/json": {"schema": {"$ref": f"#/components/schemas/{ref}"}}},
    }


def _error(description: str) -> dict:
    return _json("ErrorResponse", description)


_ID_PARAM = {"in": "path", "name": "id", "required": True, "schema": {"type": "string"}}


def build_openapi() -> dict:
    _, top = models_json_schema(
        [
            (ProjectDocument, "serialization"),
            (ProjectCreate, "validation"),
            (AddContentAction, "validation"),
            (UpdateContentAction, "validation"),
            (DeleteContentAction, "validation"),
            (AddContentResponse, "serialization"),
            (ContentMutationResponse, "serialization"),
            (SuccessResponse, "serialization"),
            (HealthResponse, "serialization"),
            (ErrorResponse, "serialization"),
        ],
        by_alias=True,
        ref_template=_REF,
    )
    components = {"schemas": top.get("$defs", {})}

    spec = {
        "openapi": "3.0.3",
        "info": {
            "title": "Content Calendar Functions API",
            "version": "0.1.0",
            "description": "Projects (one per platform) and their scheduled content items.",
        },
        "servers": [
            {"url": "http://localhost:7071/api", "description": "Local Functions host"}
        ],
        "paths": {
            "/projects": {
                "get": {
                    "summary": "List all projects",
                    "operationId": "listProjects",
                    "responses": {
                        "200": {
                            "description": "All projects, store order",
                            "content": {
                                "application/json": {
                                    "schema": {
                                        "type": "array",
                                        "items": {"$ref": "#/components/schemas/ProjectDocument"},
                                    }
                                }
                            },
                        },
                        "500": _error("Store failure"),
                    },
                },
                "post": {
                    "summary": "Create a project",
                    "operationId": "createProject",
                    "requestBody": {
                        "required": True,
                        "content": {
                            "application/json": {
                                "schema": {"$ref": "#/components/schemas/ProjectCreate"}
                            }
                        },
                    },
                    "responses": {
                        "201": _json("ProjectDocument", "Created project"),
                        "400": _error("Missing name or platform"),
                        "500": _error("Store failure"),
                    },
                },
            },
            "/projects/{id}": {
                "parameters": [_ID_PARAM],
                "get": {
                    "summary": "Fetch one project",
                    "operationId": "getProject",
                    "responses": {
                        "200": _json("ProjectDocument", "The project"),
                        "404": _error("Unknown or malformed id"),
                    },
                },
                "put": {
                    "summary": "Add, update or delete one content item",
                    "operationId": "mutateContent",
                    "requestBody": {
                        "required": True,
                        "content": {
                            "application/json": {
                                "schema": {
                                    "oneOf": [
                                        {"$ref": "#/components/schemas/AddContentAction"},
                                        {"$ref": "#/components/schemas/UpdateContentAction"},
                                        {"$ref": "#/components/schemas/DeleteContentAction"},
                                    ],
                                    "discriminator": {"propertyName": "action"},
                                }
                            }
                        },
                    },
                    "responses": {
                        "200": {
                            "description": "Mutation applied (matched=false when contentId is unknown)",
                            "content": {
                                "application/json": {
                                    "schema": {
                                        "oneOf": [
                                            {"$ref": "#/components/schemas/AddContentResponse"},
                                            {"$ref": "#/components/schemas/ContentMutationResponse"},
                                        ]
                                    }
                                }
                            },
                        },
                        "400": _error("Unknown action or invalid fields"),
                        "404": _error("Project not found"),
                        "409": _error("Content item moved concurrently"),
                    },
                },
                "delete": {
                    "summary": "Delete a project and all its content",
                    "operationId": "deleteProject",
                    "responses": {
                        "200": _json("SuccessResponse", "Deleted"),
                        "404": _error("Project not found"),
                    },
                },
            },
            "/projects/{id}/export": {
                "parameters": [_ID_PARAM],
                "get": {
                    "summary": "Export the project's content plan as CSV",
                    "operationId": "exportProject",
                    "parameters": [
                        {"in": "query", "name": "search", "schema": {"type": "string"}, "required": False},
                        {"in": "query", "name": "status", "schema": {"type": "string"}, "required": False},
                    ],
                    "responses": {
                        "200": {
                            "description": "CSV attachment",
                            "content": {"text/csv": {"schema": {"type": "string"}}},
                        },
                        "404": _error("Project not found"),
                    },
                },
            },
            "/health": {
                "get": {
                    "summary": "Check connectivity to the project store",
                    "operationId": "health",
                    "responses": {
                        "200": _json("HealthResponse", "Store reachable"),
                        "503": _json("HealthResponse", "Store unreachable"),
                    },
                }
            },
        },
        "components": components,
    }
    return spec


def generate_openapi(specs_dir: Path = SPECS) -> None:
    spec = build_openapi()
    write_json_yaml(spec, specs_dir / "openapi.json")


def main(specs_dir: Optional[Path] = None) -> None:
    target = specs_dir or SPECS
    generate_model_schemas(target)
    generate_openapi(target)
    print(f"Specs generated under {target}")


if __name__ == "__main__":
    main(Path(sys.argv[1]) if len(sys.argv) > 1 else None)
