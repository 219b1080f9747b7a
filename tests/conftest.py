"""
Shared fixtures for DetaKit tests

Provides an in-memory Base and Drive service installed behind the
DetaClient request seam, so operations run end to end without a network.
"""

import io
import json
import sys
import uuid
from pathlib import Path
from urllib.parse import unquote

import pytest
import requests

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from detakit.api import DetaClient, RequestOutput
from detakit.operations import Base, Drive


def _get_path(item, path):
    value = item
    for part in path.split("."):
        if not isinstance(value, dict) or part not in value:
            raise KeyError(path)
        value = value[part]
    return value


def _matches(item, expression, expected):
    path, _, operator = expression.partition("?")
    try:
        value = _get_path(item, path)
    except KeyError:
        return operator == "not_contains"
    if not operator:
        return value == expected
    if operator == "ne":
        return value != expected
    if operator == "lt":
        return value < expected
    if operator == "lte":
        return value <= expected
    if operator == "gt":
        return value > expected
    if operator == "gte":
        return value >= expected
    if operator in ("pfx", "prefix"):
        return isinstance(value, str) and value.startswith(expected)
    if operator in ("r", "range"):
        return expected[0] <= value <= expected[1]
    if operator == "contains":
        return expected in value
    if operator == "not_contains":
        return expected not in value
    return False


class FakeDetaClient(DetaClient):
    """
    DetaClient whose requests are answered by an in-memory service.

    Every call is recorded in `calls` as (method, path, params, json_body, raw_body).
    """

    def __init__(self):
        super().__init__("http://deta.test/v1/project/name", "project_secret")
        self.session.close()
        self.calls = []
        self.items = {}
        self.files = {}
        self.uploads = {}
        self.aborted = []
        self.finished = []
        self.fail_start = False
        self.fail_part = None
        self.fail_finish = False
        self.fail_abort = False
        self.undeletable = {}
        self.rejected_keys = set()

    # ==================== Transport ====================

    def request(self, method, path, params=None, headers=None, json_body=None,
                raw_body=None, content_type=None, stream=False):
        # Bodies cross a JSON boundary, as on the wire
        if json_body is not None:
            json_body = json.loads(json.dumps(json_body))
        self.calls.append((method, path, dict(params or {}), json_body, raw_body))
        return self._dispatch(method, path, params or {}, json_body, raw_body)

    def _ok(self, value, status=200):
        return RequestOutput(status=status, body=json.dumps(value).encode("utf-8"))

    def _fail(self, status, message="request failed"):
        body = json.dumps({"errors": [message]}).encode("utf-8")
        raise self._error_for(status, "application/json", body)

    def _dispatch(self, method, path, params, body, raw_body):
        if path == "/items" and method == "PUT":
            return self._put_items(body)
        if path.startswith("/items"):
            key = unquote(path[len("/items/"):]) if path.startswith("/items/") else None
            if method == "GET":
                return self._get_item(key)
            if method == "DELETE":
                self.items.pop(key, None)
                return self._ok(None)
            if method == "POST":
                return self._insert_item(key, body)
            if method == "PATCH":
                return self._update_item(key, body)
        if path == "/query" and method == "POST":
            return self._query(body)
        if path == "/uploads" and method == "POST":
            return self._start_upload(params)
        if path.startswith("/uploads/"):
            rest = path[len("/uploads/"):]
            if rest.endswith("/parts") and method == "POST":
                return self._upload_part(rest[:-len("/parts")], params, raw_body)
            if method == "PATCH":
                return self._finish_upload(rest)
            if method == "DELETE":
                return self._abort_upload(rest)
        if path == "/files/download" and method == "GET":
            return self._download(params)
        if path == "/files" and method == "GET":
            return self._list(params)
        if path == "/files" and method == "DELETE":
            return self._delete_files(body)
        self._fail(404, f"no route for {method} {path}")

    # ==================== Base ====================

    def _put_items(self, body):
        processed = []
        failed = []
        for item in body["items"]:
            item = dict(item)
            item.setdefault("key", uuid.uuid4().hex)
            if item["key"] in self.rejected_keys:
                failed.append(item)
                continue
            self.items[item["key"]] = item
            processed.append(item)
        response = {"processed": {"items": processed}}
        if failed:
            response["failed"] = {"items": failed}
        return self._ok(response, status=207)

    def _get_item(self, key):
        if key not in self.items:
            self._fail(404, "Key not found")
        return self._ok(self.items[key])

    def _insert_item(self, key, body):
        item = dict(body["item"])
        item.setdefault("key", key or uuid.uuid4().hex)
        if item["key"] in self.items:
            self._fail(409, "Key already exists")
        self.items[item["key"]] = item
        return self._ok(item, status=201)

    def _update_item(self, key, document):
        if key not in self.items:
            self._fail(404, "Key not found")
        item = self.items[key]

        def parent_of(path):
            parts = path.split(".")
            node = item
            for part in parts[:-1]:
                node = node.setdefault(part, {})
            return node, parts[-1]

        for path, value in document.get("set", {}).items():
            node, leaf = parent_of(path)
            node[leaf] = value
        for path, delta in document.get("increment", {}).items():
            node, leaf = parent_of(path)
            node[leaf] = node.get(leaf, 0) + delta
        for path, values in document.get("append", {}).items():
            node, leaf = parent_of(path)
            node[leaf] = node.get(leaf, []) + values
        for path, values in document.get("prepend", {}).items():
            node, leaf = parent_of(path)
            node[leaf] = values + node.get(leaf, [])
        for path in document.get("delete", []):
            node, leaf = parent_of(path)
            node.pop(leaf, None)
        return self._ok(document)

    def _query(self, body):
        groups = body.get("query") or []
        matches = [
            self.items[key] for key in sorted(self.items)
            if not groups or any(
                all(_matches(self.items[key], expr, value) for expr, value in group.items())
                for group in groups
            )
        ]
        last = body.get("last")
        if last:
            matches = [item for item in matches if item["key"] > last]
        limit = body.get("limit")
        page = matches[:limit] if limit else matches
        paging = {"size": len(page)}
        if limit and len(matches) > limit:
            paging["last"] = page[-1]["key"]
        return self._ok({"paging": paging, "items": page})

    # ==================== Drive ====================

    def _start_upload(self, params):
        if self.fail_start:
            self._fail(400, "cannot start upload")
        upload_id = uuid.uuid4().hex
        self.uploads[upload_id] = {"name": params["name"], "parts": {}}
        return self._ok({"upload_id": upload_id, "name": params["name"]}, status=202)

    def _upload_part(self, upload_id, params, raw_body):
        part = int(params["part"])
        if part == self.fail_part:
            self._fail(500, "part upload failed")
        self.uploads[upload_id]["parts"][part] = raw_body
        return self._ok({"part": part})

    def _finish_upload(self, upload_id):
        if self.fail_finish:
            self._fail(500, "cannot finish upload")
        upload = self.uploads.pop(upload_id)
        parts = upload["parts"]
        self.files[upload["name"]] = b"".join(parts[n] for n in sorted(parts))
        self.finished.append(upload_id)
        return self._ok({"upload_id": upload_id, "name": upload["name"]})

    def _abort_upload(self, upload_id):
        if self.fail_abort:
            self._fail(500, "cannot abort upload")
        self.uploads.pop(upload_id, None)
        self.aborted.append(upload_id)
        return self._ok({"upload_id": upload_id})

    def _download(self, params):
        name = params["name"]
        if name not in self.files:
            self._fail(404, "File not found")
        response = requests.Response()
        response.status_code = 200
        response.raw = io.BytesIO(self.files[name])
        response.headers["Content-Type"] = "application/octet-stream"
        return RequestOutput(status=200, headers=dict(response.headers), response=response)

    def _list(self, params):
        limit = int(params["limit"])
        prefix = params.get("prefix", "")
        last = params.get("last")
        names = [n for n in sorted(self.files) if n.startswith(prefix)]
        if last:
            names = [n for n in names if n > last]
        page = names[:limit]
        paging = {"size": len(page)}
        if len(names) > limit:
            paging["last"] = page[-1]
        return self._ok({"paging": paging, "names": page})

    def _delete_files(self, body):
        deleted, failed = [], {}
        for name in body["names"]:
            if name in self.undeletable:
                failed[name] = self.undeletable[name]
            else:
                self.files.pop(name, None)
                deleted.append(name)
        result = {"deleted": deleted}
        if failed:
            result["failed"] = failed
        return self._ok(result)


@pytest.fixture
def fake_client():
    return FakeDetaClient()


@pytest.fixture
def base(fake_client):
    return Base(fake_client, "test_base")


@pytest.fixture
def drive(fake_client):
    return Drive(fake_client, "test_drive")
