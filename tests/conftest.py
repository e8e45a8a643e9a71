from __future__ import annotations

import pytest
from flask.testing import FlaskClient

from wealth_odyssey.app import create_app
from wealth_odyssey.config import TestingConfig


@pytest.fixture()
def app():
    return create_app(TestingConfig)


@pytest.fixture()
def client(app) -> FlaskClient:
    with app.test_client() as test_client:
        yield test_client
