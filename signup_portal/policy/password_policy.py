import re
from dataclasses import dataclass
from typing import Callable

# ECMAScript's \s set; Python's \s also matches \x1c-\x1f and misses \ufeff
_WHITESPACE = re.compile(r"[\t\n\v\f\r \u00a0\u1680\u2000-\u200a\u2028\u2029\u202f\u205f\u3000\ufeff]")
_DIGIT = re.compile(r"[0-9]")
_UPPER = re.compile(r"[A-Z]")
_LOWER = re.compile(r"[a-z]")


@dataclass(frozen=True)
class PasswordRule:
    """A single policy check: `violated(password)` is True when the rule fails."""

    message: str
    violated: Callable[[str], bool]


@dataclass(frozen=True)
class PasswordPolicy:
    # Length bounds (inclusive)
    min_length: int = 10
    max_length: int = 24

    # Copy shown to the user, one line per violated rule
    msg_too_short: str = "Password must be at least {n} characters long"
    msg_too_long: str = "Password must be at most {n} characters long"
    msg_whitespace: str = "Password cannot contain spaces"
    msg_no_digit: str = "Password must contain at least one number"
    msg_no_upper: str = "Password must contain at least one uppercase letter"
    msg_no_lower: str = "Password must contain at least one lowercase letter"

    def rules(self) -> tuple[PasswordRule, ...]:
        """
        The rules in display order. Each one is evaluated independently,
        so a password can collect several violations.
        """
        return (
            PasswordRule(
                self.msg_too_short.format(n=self.min_length),
                lambda pw: len(pw) < self.min_length,
            ),
            PasswordRule(
                self.msg_too_long.format(n=self.max_length),
                lambda pw: len(pw) > self.max_length,
            ),
            PasswordRule(self.msg_whitespace, lambda pw: _WHITESPACE.search(pw) is not None),
            PasswordRule(self.msg_no_digit, lambda pw: _DIGIT.search(pw) is None),
            PasswordRule(self.msg_no_upper, lambda pw: _UPPER.search(pw) is None),
            PasswordRule(self.msg_no_lower, lambda pw: _LOWER.search(pw) is None),
        )

    def validate(self, password: str) -> list[str]:
        return [rule.message for rule in self.rules() if rule.violated(password)]


DEFAULT_PASSWORD_POLICY = PasswordPolicy()


def validate_password(password: str, policy: PasswordPolicy = DEFAULT_PASSWORD_POLICY) -> list[str]:
    """Return every violated rule message, in rule order. Empty means the password is acceptable."""
    return policy.validate(password)
