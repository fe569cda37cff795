from dataclasses import dataclass, field
from enum import Enum
from typing import Callable

from signup_portal.log import get_logger
from signup_portal.policy.password_policy import DEFAULT_PASSWORD_POLICY, PasswordPolicy
from signup_portal.policy.signup_policy import SignupPolicy
from signup_portal.signup import ErrorKind, SignupClient, SignupOutcome, classify_reply

logger = get_logger(__name__)


class FormPhase(str, Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    INVALID = "invalid"
    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass
class FormState:
    username: str = ""
    password: str = ""
    validation_errors: list[str] = field(default_factory=list)
    server_error: str | None = None
    submitting: bool = False
    has_submitted_once: bool = False


class SubmissionController:
    """
    Owns one form's state and drives its submission attempts.

    Phases: IDLE -> VALIDATING -> INVALID | PENDING -> SUCCEEDED | FAILED.
    Editing a field returns the form to IDLE and hides annotations until the
    next submit, while password violations are recomputed on every edit.

    Every dispatched attempt gets an increasing id. An edit or a newer
    attempt supersedes the one in flight; its reply is then ignored.
    """

    def __init__(
        self,
        client: SignupClient,
        password_policy: PasswordPolicy = DEFAULT_PASSWORD_POLICY,
        signup_policy: SignupPolicy | None = None,
        on_success: Callable[[str], None] | None = None,
    ):
        self.client = client
        self.password_policy = password_policy
        self.signup_policy = signup_policy or SignupPolicy()
        self.on_success = on_success

        self.state = FormState()
        self.phase = FormPhase.IDLE
        self.last_outcome: SignupOutcome | None = None
        self._attempts = 0
        self._current_attempt: int | None = None

    # ---- edits ----

    def edit_username(self, value: str) -> None:
        self.state.username = value
        self._after_edit()

    def edit_password(self, value: str) -> None:
        self.state.password = value
        self.state.validation_errors = self.password_policy.validate(value)
        self._after_edit()

    def _after_edit(self) -> None:
        self.state.server_error = None
        self.state.has_submitted_once = False
        self.last_outcome = None
        if self.phase is FormPhase.PENDING:
            # The dropped reply may be a 2xx: the user can exist without on_success firing
            logger.info("Edit supersedes pending attempt", attempt=self._current_attempt)
            self._current_attempt = None
            self.state.submitting = False
        self.phase = FormPhase.IDLE

    # ---- submission ----

    def begin_attempt(self) -> int | None:
        """
        Validate the current fields. Returns the new attempt id when the
        request may be dispatched, or None when the form is invalid.
        """
        self.phase = FormPhase.VALIDATING
        self._current_attempt = None
        self.state.submitting = False
        self.state.server_error = None
        self.last_outcome = None
        self.state.has_submitted_once = True

        errors = self.password_policy.validate(self.state.password)
        self.state.validation_errors = errors

        if not self.state.username or errors:
            self.phase = FormPhase.INVALID
            logger.info(
                "Submission blocked by validation",
                username_missing=not self.state.username,
                violations=len(errors),
            )
            return None

        self._attempts += 1
        self._current_attempt = self._attempts
        self.state.submitting = True
        self.phase = FormPhase.PENDING
        return self._current_attempt

    def resolve_attempt(self, attempt: int, outcome: SignupOutcome) -> bool:
        """Apply an attempt's outcome. Returns False (and changes nothing) for a superseded attempt."""
        if attempt != self._current_attempt:
            logger.info("Ignoring reply for superseded attempt", attempt=attempt, current=self._current_attempt)
            return False

        self._current_attempt = None
        self.state.submitting = False
        self.last_outcome = outcome

        if outcome.succeeded:
            self.phase = FormPhase.SUCCEEDED
            self.state.server_error = None
            logger.info("User created", attempt=attempt, username=self.state.username)
            if self.on_success is not None:
                try:
                    self.on_success(self.state.username)
                except Exception:
                    logger.warning("Success callback failed", attempt=attempt, exc_info=True)
        else:
            self.phase = FormPhase.FAILED
            self.state.server_error = outcome.message
            logger.info("Signup failed", attempt=attempt, kind=outcome.kind.value if outcome.kind else None)
        return True

    def submit(self) -> FormPhase:
        """Run one full attempt: validate, call the signup service, classify the reply."""
        attempt = self.begin_attempt()
        if attempt is None:
            return self.phase

        logger.info("Dispatching signup", attempt=attempt, username=self.state.username)
        try:
            reply = self.client.create_user(self.state.username, self.state.password)
            outcome = classify_reply(reply, self.signup_policy)
        except Exception:
            logger.warning("Signup request did not complete", attempt=attempt, exc_info=True)
            outcome = SignupOutcome.failure(ErrorKind.GENERIC, self.signup_policy.msg_generic)

        self.resolve_attempt(attempt, outcome)
        return self.phase

    # ---- derived view state ----

    @property
    def username_error(self) -> str | None:
        if self.state.has_submitted_once and not self.state.username:
            return self.signup_policy.msg_username_required
        return None

    @property
    def visible_password_errors(self) -> list[str]:
        if self.state.has_submitted_once:
            return list(self.state.validation_errors)
        return []

    @property
    def user_was_created(self) -> bool:
        return self.phase is FormPhase.SUCCEEDED
