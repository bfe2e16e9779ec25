"""
Document store adapter for project documents.

Projects are stored one document per project with the content items embedded
in a `contents` array. All mutations of an existing document go through
`patch_item`, which applies Cosmos DB style partial-update operations
(`add`, `set`, `replace`, `remove`) to a single document in one call.

Two backends share the interface:

* `CosmosDocumentStore` - Azure Cosmos DB container, partitioned on `/id`.
* `FileDocumentStore` - a JSON file, for local runs and tests.

`get_document_store()` picks one from `PROJECT_STORE_BACKEND`
(`auto`, `cosmos` or `file`).
"""
import json
import os
import tempfile
import threading
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from azure.core.exceptions import AzureError
from azure.cosmos import exceptions

from src.shared.cosmos_client import cosmos_configured, get_cosmos_client, get_cosmos_container
from src.shared.logging_utils import info as log_info, error as log_error
from src.specs.common.errors import ConfigurationError, ConflictError, StoreError

_DEFAULT_STORE_BASE = Path(tempfile.gettempdir()) / "content-calendar-runtime"
_MISSING = object()


@dataclass(frozen=True)
class PatchCondition:
    """Precondition for a patch: the value at `path` must equal `equals`."""

    path: str
    equals: Any


def _split_path(path: str) -> List[str]:
    if not path.startswith("/") or path == "/":
        raise StoreError(f"Invalid patch path '{path}'")
    return [t.replace("~1", "/").replace("~0", "~") for t in path[1:].split("/")]


def _list_index(container: List[Any], token: str, allow_end: bool = False) -> int:
    if token == "-" and allow_end:
        return len(container)
    if not token.isdigit():
        raise StoreError(f"Invalid array index '{token}'")
    index = int(token)
    upper = len(container) if allow_end else len(container) - 1
    if index > upper:
        raise StoreError(f"Array index {index} out of range")
    return index


def _resolve_parent(doc: Dict[str, Any], path: str) -> Tuple[Any, str]:
    tokens = _split_path(path)
    node: Any = doc
    for token in tokens[:-1]:
        if isinstance(node, list):
            node = node[_list_index(node, token)]
        elif isinstance(node, dict) and token in node:
            node = node[token]
        else:
            raise StoreError(f"Path '{path}' does not exist")
    return node, tokens[-1]


def read_path(doc: Dict[str, Any], path: str) -> Any:
    """Value at a JSON pointer path, or a sentinel when it does not exist."""
    node: Any = doc
    for token in _split_path(path):
        if isinstance(node, list):
            if not token.isdigit() or int(token) >= len(node):
                return _MISSING
            node = node[int(token)]
        elif isinstance(node, dict):
            if token not in node:
                return _MISSING
            node = node[token]
        else:
            return _MISSING
    return node


def condition_holds(doc: Dict[str, Any], condition: Optional[PatchCondition]) -> bool:
    if condition is None:
        return True
    return read_path(doc, condition.path) == condition.equals


def apply_patch_operations(doc: Dict[str, Any], operations: List[Dict[str, Any]]) -> Dict[str, Any]:
    """Apply partial-update operations in order, mutating and returning `doc`."""
    for operation in operations:
        op = operation.get("op")
        parent, key = _resolve_parent(doc, operation.get("path", ""))
        if op in ("add", "set", "replace"):
            value = operation.get("value")
            if isinstance(parent, list):
                if op == "add":
                    parent.insert(_list_index(parent, key, allow_end=True), value)
                else:
                    parent[_list_index(parent, key)] = value
            elif isinstance(parent, dict):
                if op == "replace" and key not in parent:
                    raise StoreError(f"Cannot replace missing field '{key}'")
                parent[key] = value
            else:
                raise StoreError(f"Cannot {op} into a scalar at '{operation.get('path')}'")
        elif op == "remove":
            if isinstance(parent, list):
                parent.pop(_list_index(parent, key))
            elif isinstance(parent, dict) and key in parent:
                del parent[key]
            else:
                raise StoreError(f"Cannot remove missing field '{key}'")
        else:
            raise StoreError(f"Unsupported patch operation '{op}'")
    return doc


def to_filter_predicate(condition: PatchCondition) -> str:
    """Render a condition as a Cosmos DB patch filter predicate."""
    expr = "c"
    for token in _split_path(condition.path):
        expr += f"[{token}]" if token.isdigit() else f".{token}"
    return f"FROM c WHERE {expr} = {json.dumps(condition.equals)}"


class DocumentStore:
    """Interface shared by the store backends."""

    backend = "abstract"

    def create_item(self, body: Dict[str, Any]) -> Dict[str, Any]:
        raise NotImplementedError

    def read_item(self, item_id: str) -> Optional[Dict[str, Any]]:
        raise NotImplementedError

    def list_items(self) -> List[Dict[str, Any]]:
        raise NotImplementedError

    def delete_item(self, item_id: str) -> bool:
        raise NotImplementedError

    def patch_item(
        self,
        item_id: str,
        operations: List[Dict[str, Any]],
        condition: Optional[PatchCondition] = None,
    ) -> Optional[Dict[str, Any]]:
        """Apply `operations` atomically; None when the item does not exist.

        Raises ConflictError when `condition` does not hold.
        """
        raise NotImplementedError

    def ping(self) -> bool:
        raise NotImplementedError


_FILE_LOCKS: Dict[str, threading.RLock] = {}
_FILE_LOCKS_GUARD = threading.Lock()


def _lock_for(path: Path) -> threading.RLock:
    with _FILE_LOCKS_GUARD:
        return _FILE_LOCKS.setdefault(str(path.resolve()), threading.RLock())


class FileDocumentStore(DocumentStore):
    backend = "file"

    def __init__(self, directory: Optional[str] = None):
        base = directory or os.getenv("PROJECT_STORE_DIR") or str(_DEFAULT_STORE_BASE)
        self._dir = Path(base)
        self._file = self._dir / "projects.json"
        self._lock = _lock_for(self._file)

    def _read_all(self) -> Dict[str, Dict[str, Any]]:
        if not self._file.exists():
            return {}
        try:
            return json.loads(self._file.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise StoreError(f"Could not read project store: {exc}") from exc

    def _write_all(self, data: Dict[str, Dict[str, Any]]) -> None:
        try:
            self._dir.mkdir(parents=True, exist_ok=True)
            tmp = self._file.with_suffix(".json.tmp")
            tmp.write_text(json.dumps(data), encoding="utf-8")
            os.replace(tmp, self._file)
        except OSError as exc:
            raise StoreError(f"Could not write project store: {exc}") from exc

    def create_item(self, body: Dict[str, Any]) -> Dict[str, Any]:
        with self._lock:
            data = self._read_all()
            if body["id"] in data:
                raise ConflictError(f"Item '{body['id']}' already exists")
            data[body["id"]] = body
            self._write_all(data)
        return json.loads(json.dumps(body))

    def read_item(self, item_id: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            return self._read_all().get(item_id)

    def list_items(self) -> List[Dict[str, Any]]:
        with self._lock:
            return list(self._read_all().values())

    def delete_item(self, item_id: str) -> bool:
        with self._lock:
            data = self._read_all()
            if data.pop(item_id, None) is None:
                return False
            self._write_all(data)
            return True

    def patch_item(
        self,
        item_id: str,
        operations: List[Dict[str, Any]],
        condition: Optional[PatchCondition] = None,
    ) -> Optional[Dict[str, Any]]:
        with self._lock:
            data = self._read_all()
            doc = data.get(item_id)
            if doc is None:
                return None
            if not condition_holds(doc, condition):
                raise ConflictError(
                    f"Precondition failed for item '{item_id}'",
                    details={"path": condition.path},
                )
            # Operations run on a copy so a failing operation leaves the file untouched
            patched = apply_patch_operations(json.loads(json.dumps(doc)), operations)
            data[item_id] = patched
            self._write_all(data)
            return patched

    def ping(self) -> bool:
        try:
            with self._lock:
                self._read_all()
            return True
        except StoreError:
            return False


class CosmosDocumentStore(DocumentStore):
    """Cosmos DB container partitioned on `/id`; SDK retries are disabled."""

    backend = "cosmos"

    def __init__(self, container: Any = None):
        self._container = container

    def _ensure_container(self):
        if self._container is None:
            self._container = get_cosmos_container()
            log_info(None, "cosmos:projects:init", container=self._container.id)
        return self._container

    @staticmethod
    def _store_error(action: str, item_id: Optional[str], exc: Exception) -> StoreError:
        log_error(item_id, f"cosmos:projects:{action}_failed", error=str(exc))
        return StoreError(f"Cosmos DB {action} failed", details={"itemId": item_id})

    def create_item(self, body: Dict[str, Any]) -> Dict[str, Any]:
        container = self._ensure_container()
        try:
            return container.create_item(body=body)
        except exceptions.CosmosResourceExistsError as exc:
            raise ConflictError(f"Item '{body.get('id')}' already exists") from exc
        except AzureError as exc:
            raise self._store_error("create", body.get("id"), exc) from exc

    def read_item(self, item_id: str) -> Optional[Dict[str, Any]]:
        container = self._ensure_container()
        try:
            return container.read_item(item=item_id, partition_key=item_id)
        except exceptions.CosmosResourceNotFoundError:
            return None
        except AzureError as exc:
            raise self._store_error("read", item_id, exc) from exc

    def list_items(self) -> List[Dict[str, Any]]:
        container = self._ensure_container()
        try:
            return list(
                container.query_items(
                    query="SELECT * FROM c",
                    enable_cross_partition_query=True,
                )
            )
        except AzureError as exc:
            raise self._store_error("query", None, exc) from exc

    def delete_item(self, item_id: str) -> bool:
        container = self._ensure_container()
        try:
            container.delete_item(item=item_id, partition_key=item_id)
            return True
        except exceptions.CosmosResourceNotFoundError:
            return False
        except AzureError as exc:
            raise self._store_error("delete", item_id, exc) from exc

    def patch_item(
        self,
        item_id: str,
        operations: List[Dict[str, Any]],
        condition: Optional[PatchCondition] = None,
    ) -> Optional[Dict[str, Any]]:
        container = self._ensure_container()
        kwargs: Dict[str, Any] = {}
        if condition is not None:
            kwargs["filter_predicate"] = to_filter_predicate(condition)
        try:
            return container.patch_item(
                item=item_id,
                partition_key=item_id,
                patch_operations=operations,
                **kwargs,
            )
        except exceptions.CosmosResourceNotFoundError:
            return None
        except exceptions.CosmosAccessConditionFailedError as exc:
            raise ConflictError(
                f"Precondition failed for item '{item_id}'",
                details={"predicate": kwargs.get("filter_predicate")},
            ) from exc
        except AzureError as exc:
            raise self._store_error("patch", item_id, exc) from exc

    def ping(self) -> bool:
        try:
            self._ensure_container().read()
            return True
        except (AzureError, ConfigurationError, StoreError) as exc:
            log_error(None, "cosmos:projects:ping_failed", error=str(exc))
            return False


def _select_backend() -> DocumentStore:
    backend = os.getenv("PROJECT_STORE_BACKEND", "auto").lower()
    if backend == "file":
        return FileDocumentStore()
    if backend == "cosmos":
        get_cosmos_client()
        return CosmosDocumentStore()
    if backend != "auto":
        raise ConfigurationError(f"Unknown PROJECT_STORE_BACKEND '{backend}'")
    # auto-detect cosmos if config present
    if cosmos_configured():
        return CosmosDocumentStore()
    return FileDocumentStore()


@lru_cache(maxsize=1)
def get_document_store() -> DocumentStore:
    """Get or create the process-wide document store"""
    store = _select_backend()
    log_info(None, "store:selected", backend=store.backend)
    return store
