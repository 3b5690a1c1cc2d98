"""Error taxonomy for Cognito account-lifecycle operations."""

from __future__ import annotations

import json
from typing import Any, Optional

from botocore.exceptions import ClientError


class ServiceConfigurationError(RuntimeError):
    """Raised when required Cognito configuration is missing or malformed."""


class CognitoAuthError(RuntimeError):
    """Base class for provider failures surfaced by the auth client.

    ``message`` is the provider's diagnostic text, unchanged.
    """

    def __init__(
        self,
        message: str,
        *,
        code: Optional[str] = None,
        provider_error: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.provider_error = provider_error

    def __str__(self) -> str:
        return self.message

    @classmethod
    def from_provider(cls, exc: BaseException) -> "CognitoAuthError":
        return cls(
            provider_error_message(exc),
            code=provider_error_code(exc),
            provider_error=exc,
        )


class RegistrationError(CognitoAuthError):
    """Raised when sign-up is rejected."""


class ConfirmationError(CognitoAuthError):
    """Raised when a sign-up confirmation code is rejected."""


class AuthenticationError(CognitoAuthError):
    """Raised on bad credentials, unconfirmed accounts or unhandled challenges."""


class ResendError(CognitoAuthError):
    """Raised when a confirmation code cannot be re-sent."""


class PasswordResetRequestError(CognitoAuthError):
    """Raised when a password reset cannot be started."""


class PasswordResetConfirmError(CognitoAuthError):
    """Raised when a password reset code or new password is rejected."""


def _error_payload(exc: BaseException) -> Any:
    if isinstance(exc, ClientError):
        return exc.response.get("Error") or exc.response
    return {"type": type(exc).__name__, "args": list(exc.args)}


def provider_error_code(exc: BaseException) -> Optional[str]:
    if isinstance(exc, ClientError):
        code = (exc.response.get("Error") or {}).get("Code")
        return code or None
    return None


def provider_error_message(exc: BaseException) -> str:
    """Return the provider's message verbatim, or a JSON dump of the error."""

    if isinstance(exc, ClientError):
        message = (exc.response.get("Error") or {}).get("Message")
        if message:
            return str(message)
    else:
        if exc.args and isinstance(exc.args[0], str) and exc.args[0]:
            return exc.args[0]
        text = str(exc)
        if text:
            return text
    return json.dumps(_error_payload(exc), default=str, sort_keys=True)
