import os
from dataclasses import dataclass, field

from signup_portal.policy.password_policy import PasswordPolicy
from signup_portal.policy.signup_policy import SignupPolicy


def _env_bool(name: str, default: bool) -> bool:
    v = os.environ.get(name)
    if v is None:
        return default
    return v.strip().lower() in ("1", "true", "yes", "y", "on")


def _env(name: str, default: str):
    return field(default_factory=lambda: os.environ.get(name, default))


@dataclass(frozen=True)
class Settings:
    # Signup service
    signup_url: str = _env("SIGNUP_URL", "https://signup.example.com/challenge-signup")
    auth_token: str = _env("SIGNUP_AUTH_TOKEN", "")
    request_timeout_sec: float = field(default_factory=lambda: float(os.environ.get("SIGNUP_TIMEOUT_SEC", "10")))

    # Security / sessions
    flask_secret: str = _env("FLASK_SECRET", "CHANGE_ME_LONG_RANDOM")
    session_cookie_secure: bool = field(default_factory=lambda: _env_bool("SESSION_COOKIE_SECURE", True))

    # Logging
    log_level: str = _env("LOG_LEVEL", "INFO")
    debug_all: bool = field(default_factory=lambda: _env_bool("DEBUG_ALL", False))

    # Policy objects (centralized thresholds/messages)
    password_policy: PasswordPolicy = field(default_factory=PasswordPolicy)
    signup_policy: SignupPolicy = field(default_factory=SignupPolicy)
