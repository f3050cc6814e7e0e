"""Error Handlers — envelope shape and logging for each error layer.

Tests cover:
    - InputShapeError → 400 with a `details` entry naming the offending field
    - Configuration errors → 500, logged at CRITICAL with the policy mode
    - Unexpected exceptions → 500 INTERNAL_ERROR without the exception text
"""

import logging

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from cc_eligibility.api.error_handlers import register_error_handlers
from cc_eligibility.core.errors import (
    ErrorContext,
    InputShapeError,
    PolicyConfigurationError,
)


LOGGER = "cc_eligibility.api.error_handlers"


def _build_app() -> FastAPI:
    app = FastAPI()
    register_error_handlers(app)

    @app.get("/shape")
    async def shape():
        raise InputShapeError(
            "cart.lines[0].merchandise", "an object", ErrorContext(policy_mode="extended"),
        )

    @app.get("/config")
    async def config():
        raise PolicyConfigurationError(
            "allowed_shipping_methods", "at least one method is required",
            ErrorContext(policy_mode="base"),
        )

    @app.get("/crash")
    async def crash():
        raise RuntimeError("secret internals")

    return app


@pytest.fixture
async def error_client():
    transport = ASGITransport(app=_build_app(), raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


async def test_input_shape_error_returns_400_with_field_details(error_client, caplog):
    caplog.set_level(logging.WARNING, logger=LOGGER)
    response = await error_client.get("/shape")
    assert response.status_code == 400
    error = response.json()["error"]
    assert error["code"] == "INPUT_SHAPE_VIOLATION"
    assert error["context"] == {
        "policy_mode": "extended", "field": "cart.lines[0].merchandise",
    }
    assert error["details"] == [{
        "field": "cart.lines[0].merchandise",
        "message": "Input field 'cart.lines[0].merchandise' must be an object",
        "type": "input_shape",
    }]
    record = caplog.records[-1]
    assert record.levelno == logging.WARNING
    assert record.error_code == "INPUT_SHAPE_VIOLATION"
    assert record.policy_mode == "extended"


async def test_configuration_error_logs_critical_with_policy_mode(error_client, caplog):
    caplog.set_level(logging.WARNING, logger=LOGGER)
    response = await error_client.get("/config")
    assert response.status_code == 500
    error = response.json()["error"]
    assert error["code"] == "POLICY_MISCONFIGURED"
    assert "details" not in error
    record = caplog.records[-1]
    assert record.levelno == logging.CRITICAL
    assert record.policy_mode == "base"
    assert record.path == "/config"


async def test_unexpected_error_hides_internals(error_client):
    response = await error_client.get("/crash")
    assert response.status_code == 500
    error = response.json()["error"]
    assert error["code"] == "INTERNAL_ERROR"
    assert "secret internals" not in response.text
