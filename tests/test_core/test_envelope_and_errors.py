# tests/test_core/test_envelope_and_errors.py
import uuid

import pytest
from fastapi import FastAPI
from httpx import AsyncClient
from sqlalchemy.exc import IntegrityError, NoResultFound

from streamhub.api.responses import build_pagination, paginated_envelope, success_envelope
from streamhub.core.exceptions import ConflictError, ErrorKind, NotFoundError
from streamhub.middleware.request_id import choose_request_id


# ─────────────────────────────────────────────────────────────
# Envelope builders
# ─────────────────────────────────────────────────────────────
def test_pagination_block_for_middle_page():
    assert build_pagination(page=2, limit=20, total=45) == {
        "page": 2,
        "limit": 20,
        "total": 45,
        "totalPages": 3,
        "hasNextPage": True,
        "hasPreviousPage": True,
    }


def test_pagination_block_for_empty_list():
    block = build_pagination(page=1, limit=20, total=0)
    assert block["totalPages"] == 0
    assert block["hasNextPage"] is False
    assert block["hasPreviousPage"] is False


def test_success_envelope_shape():
    body = success_envelope({"a": 1}, "Done")
    assert body["success"] is True
    assert body["message"] == "Done"
    assert body["data"] == {"a": 1}
    assert body["timestamp"].endswith("Z")

    page = paginated_envelope([1, 2], page=1, limit=2, total=3)
    assert page["data"] == [1, 2]
    assert page["pagination"]["totalPages"] == 2


def test_not_found_message_names_resource():
    err = NotFoundError("Movie")
    assert err.message == "Movie not found"
    assert err.status_code == 404
    assert err.to_error() == {"code": "NOT_FOUND", "message": "Movie not found", "statusCode": 404}


def test_error_kind_from_status():
    assert ErrorKind.from_status(409) is ErrorKind.CONFLICT
    assert ErrorKind.from_status(418) is ErrorKind.VALIDATION
    assert ErrorKind.from_status(503) is ErrorKind.INTERNAL


# ─────────────────────────────────────────────────────────────
# Handlers (through the real app)
# ─────────────────────────────────────────────────────────────
@pytest.fixture()
def failing_routes(app: FastAPI) -> FastAPI:
    @app.get("/_test/conflict")
    async def _conflict():
        raise ConflictError("Already there", details={"field": "slug"})

    @app.get("/_test/integrity")
    async def _integrity():
        raise IntegrityError("INSERT", {}, Exception("UNIQUE constraint failed: users.email"))

    @app.get("/_test/no-result")
    async def _no_result():
        raise NoResultFound("nothing")

    @app.get("/_test/boom")
    async def _boom():
        raise RuntimeError("kaboom")

    return app


@pytest.mark.anyio
async def test_app_exception_maps_straight_through(failing_routes, async_client: AsyncClient):
    res = await async_client.get("/_test/conflict")
    assert res.status_code == 409
    body = res.json()
    assert body["success"] is False
    assert body["error"] == {
        "code": "CONFLICT",
        "message": "Already there",
        "statusCode": 409,
        "details": {"field": "slug"},
    }
    assert body["timestamp"]


@pytest.mark.anyio
async def test_integrity_error_becomes_conflict(failing_routes, async_client: AsyncClient):
    res = await async_client.get("/_test/integrity")
    assert res.status_code == 409
    error = res.json()["error"]
    assert error["message"] == "Unique constraint violation"
    assert error["details"] == {"field": "email"}


@pytest.mark.anyio
async def test_no_result_becomes_not_found(failing_routes, async_client: AsyncClient):
    res = await async_client.get("/_test/no-result")
    assert res.status_code == 404
    assert res.json()["error"]["message"] == "Record not found"


@pytest.mark.anyio
async def test_unhandled_error_is_internal_without_traceback(failing_routes, async_client: AsyncClient):
    res = await async_client.get("/_test/boom")
    assert res.status_code == 500
    error = res.json()["error"]
    assert error["code"] == "INTERNAL_ERROR"
    assert error["message"] == "kaboom"
    assert "Traceback" not in res.text


@pytest.mark.anyio
async def test_unknown_route_uses_envelope(async_client: AsyncClient):
    res = await async_client.get("/api/nope")
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "NOT_FOUND"


@pytest.mark.anyio
async def test_wrong_method_uses_envelope(async_client: AsyncClient):
    res = await async_client.delete("/api/auth/login")
    assert res.status_code == 405
    assert res.json()["success"] is False


@pytest.mark.anyio
async def test_request_validation_is_400_with_field_details(async_client: AsyncClient):
    res = await async_client.get("/api/content/movies", params={"page": 0})
    assert res.status_code == 400
    error = res.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert any(d["field"] == "page" for d in error["details"])


# ─────────────────────────────────────────────────────────────
# Request id, hardening headers, probes
# ─────────────────────────────────────────────────────────────
def test_choose_request_id_accepts_only_uuid4():
    rid = str(uuid.uuid4())
    assert choose_request_id(rid) == rid
    assert choose_request_id("not-a-uuid") != "not-a-uuid"
    assert uuid.UUID(choose_request_id(None)).version == 4


@pytest.mark.anyio
async def test_request_id_echoed_or_generated(async_client: AsyncClient):
    rid = str(uuid.uuid4())
    res = await async_client.get("/healthz", headers={"X-Request-ID": rid})
    assert res.headers["X-Request-ID"] == rid

    res = await async_client.get("/healthz", headers={"X-Request-ID": "<script>"})
    assert uuid.UUID(res.headers["X-Request-ID"]).version == 4


@pytest.mark.anyio
async def test_baseline_security_headers(async_client: AsyncClient):
    res = await async_client.get("/healthz")
    assert res.headers["X-Content-Type-Options"] == "nosniff"
    assert res.headers["X-Frame-Options"] == "DENY"


@pytest.mark.anyio
async def test_probes(async_client: AsyncClient):
    assert (await async_client.get("/healthz")).json() == {"ok": True}
    res = await async_client.get("/readyz")
    assert res.status_code == 200
    assert res.json() == {"ready": True, "checks": {"db": True}}
