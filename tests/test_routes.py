import json

import requests
import responses

from tests.conftest import SIGNUP_URL


def post_form(http, username="alice", password="GoodPass123"):
    return http.post("/", data={"username": username, "password": password})


class TestForm:
    def test_get_renders_clean_form(self, http):
        resp = http.get("/")

        assert resp.status_code == 200
        page = resp.get_data(as_text=True)
        assert 'id="username-input"' in page
        assert 'role="alert"' not in page

    def test_security_headers(self, http):
        resp = http.get("/")

        assert resp.headers["X-Content-Type-Options"] == "nosniff"
        assert resp.headers["X-Frame-Options"] == "DENY"
        assert resp.headers["Cache-Control"] == "no-store"


class TestSubmit:
    @responses.activate
    def test_success_redirects_to_created(self, http):
        responses.add(responses.POST, SIGNUP_URL, status=200)

        resp = post_form(http)

        assert resp.status_code == 303
        assert resp.headers["Location"].endswith("/created")
        assert "User was created." in http.get("/created").get_data(as_text=True)
        # Form now points at the success page until reset
        assert http.get("/").status_code == 302

    def test_missing_username(self, http):
        resp = post_form(http, username="")

        assert resp.status_code == 400
        page = resp.get_data(as_text=True)
        assert "Please enter a username." in page
        assert 'aria-errormessage="username-error"' in page

    @responses.activate
    def test_invalid_password_lists_violations(self, http):
        resp = post_form(http, password="short")

        assert resp.status_code == 400
        page = resp.get_data(as_text=True)
        assert "<li>Password must be at least 10 characters long</li>" in page
        assert "<li>Password must contain at least one number</li>" in page
        assert "<li>Password must contain at least one uppercase letter</li>" in page
        assert len(responses.calls) == 0

    @responses.activate
    def test_rejected_password(self, http):
        responses.add(responses.POST, SIGNUP_URL, json={"error": "password not allowed"}, status=400)

        resp = post_form(http)

        assert resp.status_code == 422
        assert "the entered password is not allowed" in resp.get_data(as_text=True)

    @responses.activate
    def test_network_failure(self, http):
        responses.add(responses.POST, SIGNUP_URL, body=requests.ConnectionError("down"))

        resp = post_form(http)

        assert resp.status_code == 502
        assert "Something went wrong, please try again." in resp.get_data(as_text=True)

    @responses.activate
    def test_username_is_echoed_but_password_is_not(self, http):
        responses.add(responses.POST, SIGNUP_URL, status=401)

        page = post_form(http, username="alice", password="GoodPass123").get_data(as_text=True)

        assert 'value="alice"' in page
        assert "GoodPass123" not in page
        assert "Not authenticated to access this resource." in page


class TestCreated:
    def test_created_without_flag_redirects(self, http):
        resp = http.get("/created")

        assert resp.status_code == 302

    @responses.activate
    def test_reset_allows_another_signup(self, http):
        responses.add(responses.POST, SIGNUP_URL, status=201)
        post_form(http)

        resp = http.post("/created/reset")

        assert resp.status_code == 302
        assert http.get("/").status_code == 200


class TestPasswordCheck:
    @responses.activate
    def test_returns_violations(self, http):
        resp = http.post("/password-check", json={"password": "short"})

        assert resp.status_code == 200
        assert resp.get_json() == {
            "errors": [
                "Password must be at least 10 characters long",
                "Password must contain at least one number",
                "Password must contain at least one uppercase letter",
            ]
        }
        assert len(responses.calls) == 0

    def test_valid_password(self, http):
        resp = http.post("/password-check", json={"password": "GoodPass123"})

        assert resp.get_json() == {"errors": []}

    def test_missing_body_is_treated_as_empty(self, http):
        resp = http.post("/password-check", data="nope", content_type="text/plain")

        assert resp.status_code == 200
        assert len(resp.get_json()["errors"]) == 4

    def test_non_string_password(self, http):
        resp = http.post(
            "/password-check",
            data=json.dumps({"password": 123}),
            content_type="application/json",
        )

        assert resp.status_code == 400
