from __future__ import annotations

import pytest
from flask import Flask
from flask.testing import FlaskClient

from nz_invest.app import create_app


@pytest.fixture()
def app() -> Flask:
    return create_app({"TESTING": True, "MAX_SCENARIOS": 3})


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    with app.test_client() as test_client:
        yield test_client
