from flask import Blueprint, jsonify, redirect, render_template, request, session, url_for

from signup_portal.controller import FormPhase, SubmissionController
from signup_portal.signup import ErrorKind


def _status_for(controller: SubmissionController) -> int:
    """HTTP status for a re-rendered form after an unsuccessful attempt."""
    if controller.phase is FormPhase.INVALID:
        return 400
    outcome = controller.last_outcome
    if outcome is not None and outcome.kind is ErrorKind.REJECTED_PASSWORD:
        return 422
    return 502


def _form_context(controller: SubmissionController) -> dict:
    return {
        "username": controller.state.username,
        "username_error": controller.username_error,
        "password_errors": controller.visible_password_errors,
        "server_error": controller.state.server_error,
        "submitting": controller.state.submitting,
    }


def build_blueprint(settings, signup_client):
    bp = Blueprint("signup", __name__)

    def _mark_created(username: str) -> None:
        # Only the flag lives in the session; credentials are never stored
        session["user_was_created"] = True

    def _controller() -> SubmissionController:
        return SubmissionController(
            signup_client,
            password_policy=settings.password_policy,
            signup_policy=settings.signup_policy,
            on_success=_mark_created,
        )

    @bp.get("/")
    def form():
        if session.get("user_was_created"):
            return redirect(url_for("signup.created"))
        return render_template("signup.html", **_form_context(_controller()))

    @bp.post("/")
    def submit():
        controller = _controller()
        controller.edit_username(request.form.get("username", ""))
        controller.edit_password(request.form.get("password", ""))

        if controller.submit() is FormPhase.SUCCEEDED:
            return redirect(url_for("signup.created"), code=303)

        return render_template("signup.html", **_form_context(controller)), _status_for(controller)

    @bp.post("/password-check")
    def password_check():
        """Live re-validation while typing; never contacts the signup service."""
        data = request.get_json(silent=True) or {}
        password = data.get("password", "") if isinstance(data, dict) else ""
        if not isinstance(password, str):
            return jsonify(error="password must be a string"), 400
        return jsonify(errors=settings.password_policy.validate(password))

    @bp.get("/created")
    def created():
        if not session.get("user_was_created"):
            return redirect(url_for("signup.form"))
        return render_template("created.html")

    @bp.post("/created/reset")
    def reset():
        session.pop("user_was_created", None)
        return redirect(url_for("signup.form"))

    return bp
