"""Pytest configuration and shared fixtures."""

import pytest

from signup_portal.app import create_app
from signup_portal.config import Settings
from signup_portal.signup import SignupClient

SIGNUP_URL = "https://signup.test/challenge-signup"
AUTH_TOKEN = "test-token"


@pytest.fixture
def settings():
    return Settings(
        signup_url=SIGNUP_URL,
        auth_token=AUTH_TOKEN,
        flask_secret="test-secret",
        session_cookie_secure=False,
    )


@pytest.fixture
def signup_client(settings):
    return SignupClient(settings.signup_url, settings.auth_token, timeout=settings.request_timeout_sec)


@pytest.fixture
def app(settings, signup_client):
    app = create_app(settings, signup_client)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def http(app):
    return app.test_client()
