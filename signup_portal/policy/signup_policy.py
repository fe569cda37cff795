from dataclasses import dataclass


@dataclass(frozen=True)
class SignupPolicy:
    # Substring looked for (case-insensitively) in the "error" field of a 400 reply
    password_not_allowed_marker: str = "password not allowed"

    # Copy you want for UI
    msg_username_required: str = "Please enter a username."
    msg_not_authenticated: str = "Not authenticated to access this resource."
    msg_password_not_allowed: str = "Sorry, the entered password is not allowed, please try a different one."
    msg_generic: str = "Something went wrong, please try again."
