"""Awaitable client for Cognito user-pool sign-up, sign-in and password reset."""

from __future__ import annotations

from .client import CognitoAuthClient
from .config import CognitoConfig, region_from_user_pool_id
from .exceptions import (
    AuthenticationError,
    CognitoAuthError,
    ConfirmationError,
    PasswordResetConfirmError,
    PasswordResetRequestError,
    RegistrationError,
    ResendError,
    ServiceConfigurationError,
    provider_error_message,
)
from .session import CognitoSession

__all__ = [
    "CognitoAuthClient",
    "CognitoConfig",
    "CognitoSession",
    "region_from_user_pool_id",
    "provider_error_message",
    "CognitoAuthError",
    "RegistrationError",
    "ConfirmationError",
    "AuthenticationError",
    "ResendError",
    "PasswordResetRequestError",
    "PasswordResetConfirmError",
    "ServiceConfigurationError",
]
