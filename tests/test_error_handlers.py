import logging

from fastapi import FastAPI
from fastapi.testclient import TestClient
from pymongo.errors import DuplicateKeyError, ServerSelectionTimeoutError

from cohort_api.api.error_handlers import register_error_handlers
from cohort_api.core.errors import ApiError, ErrorKind, conflict, malformed, not_found, unauthenticated
from cohort_api.db.mongodb import get_mongo_db
from cohort_api.main import app


def _app_raising(exc: Exception) -> TestClient:
    app = FastAPI()
    register_error_handlers(app)

    @app.get("/boom")
    def boom():
        raise exc

    return TestClient(app, raise_server_exceptions=False)


def test_error_kinds_map_to_http_status() -> None:
    assert malformed().http_status == 400
    assert unauthenticated().http_status == 401
    assert not_found().http_status == 404
    assert conflict().http_status == 409
    assert ApiError(ErrorKind.INTERNAL, "x").http_status == 500


def test_api_error_uses_its_kind_and_message() -> None:
    response = _app_raising(conflict("Cohort already exists")).get("/boom")

    assert response.status_code == 409
    assert response.json() == {"error": "Cohort already exists"}


def test_duplicate_key_error_names_the_field() -> None:
    exc = DuplicateKeyError("E11000 duplicate key error", 11000, {"keyValue": {"email": "a@b.com"}})

    response = _app_raising(exc).get("/boom")

    assert response.status_code == 409
    assert response.json() == {"error": "email already exists"}


def test_duplicate_key_error_without_details() -> None:
    response = _app_raising(DuplicateKeyError("E11000 duplicate key error", 11000)).get("/boom")

    assert response.status_code == 409
    assert response.json() == {"error": "Duplicate key"}


def test_unhandled_error_is_generic_500() -> None:
    response = _app_raising(RuntimeError("database password is hunter2")).get("/boom")

    assert response.status_code == 500
    assert response.json() == {"error": "Internal Server Error"}


def test_unknown_route_and_wrong_method_use_error_shape(client) -> None:
    missing = client.get("/api/nothing-here")
    wrong_method = client.patch("/api/cohorts")

    assert missing.status_code == 404
    assert missing.json() == {"error": "Not found"}
    assert wrong_method.status_code == 405
    assert set(wrong_method.json()) == {"error"}


def test_health_and_docs(client) -> None:
    assert client.get("/").json() == {"status": "ok", "docs": "/docs"}

    docs = client.get("/docs")
    assert docs.status_code == 200
    assert "text/html" in docs.headers["content-type"]


def test_openapi_documents_error_body(client) -> None:
    schema = client.get("/openapi.json").json()

    assert schema["components"]["schemas"]["ErrorResponse"]["required"] == ["error"]
    get_cohort = schema["paths"]["/api/cohorts/{cohort_id}"]["get"]["responses"]
    login = schema["paths"]["/auth/login"]["post"]["responses"]
    for responses, code in [(get_cohort, "404"), (get_cohort, "400"), (login, "401")]:
        ref = responses[code]["content"]["application/json"]["schema"]["$ref"]
        assert ref.endswith("/ErrorResponse")


def test_unhandled_error_still_gets_access_log_line(client, caplog) -> None:
    def broken_store():
        raise RuntimeError("store exploded")

    app.dependency_overrides[get_mongo_db] = broken_store
    caplog.set_level(logging.INFO, logger="cohort_api.main")

    response = TestClient(app, raise_server_exceptions=False).get("/api/cohorts")

    assert response.status_code == 500
    assert response.json() == {"error": "Internal Server Error"}
    assert any(
        record.name == "cohort_api.main" and record.getMessage().startswith("GET /api/cohorts 500")
        for record in caplog.records
    )


def test_health_pings_the_injected_store(client) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "mongodb": "connected"}


def test_health_reports_unreachable_store(client) -> None:
    class UnreachableDatabase:
        def command(self, name):
            raise ServerSelectionTimeoutError("no servers available")

    app.dependency_overrides[get_mongo_db] = lambda: UnreachableDatabase()

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "degraded", "mongodb": "disconnected"}
