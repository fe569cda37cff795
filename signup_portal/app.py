from flask import Flask

from signup_portal.config import Settings
from signup_portal.log import get_logger, setup_logging
from signup_portal.routes import build_blueprint
from signup_portal.security import add_security_headers, configure_session
from signup_portal.signup import SignupClient

logger = get_logger(__name__)


def create_app(settings: Settings | None = None, signup_client: SignupClient | None = None) -> Flask:
    settings = settings or Settings()
    setup_logging(settings.log_level, settings.debug_all)

    app = Flask(__name__)
    app.secret_key = settings.flask_secret
    configure_session(app, settings.session_cookie_secure)
    add_security_headers(app)

    if not settings.auth_token:
        logger.warning("SIGNUP_AUTH_TOKEN is empty; the signup service will likely reject requests")

    if signup_client is None:
        signup_client = SignupClient(
            settings.signup_url,
            settings.auth_token,
            timeout=settings.request_timeout_sec,
        )

    app.register_blueprint(build_blueprint(settings, signup_client))
    return app


if __name__ == "__main__":
    create_app().run("127.0.0.1", 8000, debug=False)
