from dataclasses import dataclass
from enum import Enum

import requests

from signup_portal.log import get_logger
from signup_portal.policy.signup_policy import SignupPolicy

logger = get_logger(__name__)


class SignupUnavailable(Exception):
    """The signup request could not be sent, or its response could not be read."""


class ErrorKind(str, Enum):
    AUTHENTICATION = "authentication"
    REJECTED_PASSWORD = "rejected_password"
    GENERIC = "generic"


@dataclass(frozen=True)
class SignupReply:
    status_code: int
    # Only filled for 400 replies whose JSON body carries a string "error" field
    error: str | None = None


@dataclass(frozen=True)
class SignupOutcome:
    succeeded: bool
    kind: ErrorKind | None = None
    message: str | None = None

    @classmethod
    def success(cls) -> "SignupOutcome":
        return cls(succeeded=True)

    @classmethod
    def failure(cls, kind: ErrorKind, message: str) -> "SignupOutcome":
        return cls(succeeded=False, kind=kind, message=message)


def _error_field(response: requests.Response) -> str | None:
    """Best-effort read of {"error": "..."}; anything else is treated as absent."""
    try:
        data = response.json()
    except ValueError:
        return None
    if isinstance(data, dict) and isinstance(data.get("error"), str):
        return data["error"]
    return None


class SignupClient:
    def __init__(self, signup_url: str, auth_token: str, timeout: float = 10):
        self.signup_url = signup_url
        self.auth_token = auth_token
        self.timeout = timeout

    def create_user(self, username: str, password: str) -> SignupReply:
        """
        POST the credentials to the signup service.
        Any HTTP status is returned as a reply; only transport failures raise
        (SignupUnavailable). The body is consumed for 400 replies only.
        """
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.auth_token}",
        }
        payload = {"username": username, "password": password}

        try:
            r = requests.post(self.signup_url, json=payload, headers=headers, timeout=self.timeout)
        except requests.RequestException as e:
            raise SignupUnavailable(f"Signup request failed: {e.__class__.__name__}") from e

        error = _error_field(r) if r.status_code == 400 else None
        logger.debug("Signup service replied", status_code=r.status_code, has_error_field=error is not None)
        return SignupReply(status_code=r.status_code, error=error)


def classify_reply(reply: SignupReply, policy: SignupPolicy) -> SignupOutcome:
    status = reply.status_code

    if status in (401, 403):
        return SignupOutcome.failure(ErrorKind.AUTHENTICATION, policy.msg_not_authenticated)
    if status == 500:
        return SignupOutcome.failure(ErrorKind.GENERIC, policy.msg_generic)
    if status == 400:
        if reply.error and policy.password_not_allowed_marker in reply.error.lower():
            return SignupOutcome.failure(ErrorKind.REJECTED_PASSWORD, policy.msg_password_not_allowed)
        return SignupOutcome.failure(ErrorKind.GENERIC, policy.msg_generic)
    if 200 <= status < 300:
        return SignupOutcome.success()
    return SignupOutcome.failure(ErrorKind.GENERIC, policy.msg_generic)
