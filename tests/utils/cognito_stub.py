"""Cognito user-pool stubs for unit tests."""

from __future__ import annotations

import threading
import time
from typing import Any, Dict, List, Mapping, Optional, Tuple

from botocore.exceptions import ClientError
from jose import jwt


POOL_ID = "us-east-1_AbC123xyz"
CLIENT_ID = "client-abc"


def client_error(code: str, message: Optional[str], operation: str = "SignUp") -> ClientError:
    error: Dict[str, Any] = {"Code": code}
    if message is not None:
        error["Message"] = message
    return ClientError({"Error": error}, operation)


def make_token(exp_offset_s: int = 3600, **claims: Any) -> str:
    payload = {"sub": "user-sub", "exp": int(time.time()) + exp_offset_s}
    payload.update(claims)
    return jwt.encode(payload, "test-secret", algorithm="HS256")


def authentication_result(exp_offset_s: int = 3600) -> Dict[str, Any]:
    return {
        "IdToken": make_token(exp_offset_s, token_use="id"),
        "AccessToken": make_token(exp_offset_s, token_use="access"),
        "RefreshToken": "refresh-token-value",
        "ExpiresIn": 3600,
        "TokenType": "Bearer",
    }


class FakeCognitoIdp:
    """Records each call and raises the configured error for an operation."""

    def __init__(self, errors: Mapping[str, BaseException] | None = None) -> None:
        self.calls: List[Tuple[str, Dict[str, Any]]] = []
        self.errors = dict(errors or {})
        self._lock = threading.Lock()

    def _record(self, name: str, kwargs: Dict[str, Any]) -> None:
        with self._lock:
            self.calls.append((name, kwargs))
        error = self.errors.get(name)
        if error is not None:
            raise error

    def call_names(self) -> List[str]:
        return [name for name, _ in self.calls]

    def sign_up(self, **kwargs: Any) -> Dict[str, Any]:
        self._record("sign_up", kwargs)
        return {"UserConfirmed": False, "UserSub": "3f0c-sub"}

    def confirm_sign_up(self, **kwargs: Any) -> Dict[str, Any]:
        self._record("confirm_sign_up", kwargs)
        return {}

    def resend_confirmation_code(self, **kwargs: Any) -> Dict[str, Any]:
        self._record("resend_confirmation_code", kwargs)
        return {"CodeDeliveryDetails": {"DeliveryMedium": "EMAIL"}}

    def forgot_password(self, **kwargs: Any) -> Dict[str, Any]:
        self._record("forgot_password", kwargs)
        return {"CodeDeliveryDetails": {"DeliveryMedium": "EMAIL"}}

    def confirm_forgot_password(self, **kwargs: Any) -> Dict[str, Any]:
        self._record("confirm_forgot_password", kwargs)
        return {}


class FakeSRPFactory:
    """Stands in for ``AWSSRP``; each instance authenticates once."""

    def __init__(
        self,
        *,
        tokens: Optional[Mapping[str, Any]] = None,
        error: Optional[BaseException] = None,
    ) -> None:
        self.tokens = dict(tokens) if tokens is not None else {
            "AuthenticationResult": authentication_result(),
            "ChallengeParameters": {},
        }
        self.error = error
        self.instances: List[Dict[str, Any]] = []
        self.authenticate_calls = 0

    def __call__(self, **kwargs: Any) -> "FakeSRPFactory":
        self.instances.append(kwargs)
        return self

    def authenticate_user(self) -> Dict[str, Any]:
        self.authenticate_calls += 1
        if self.error is not None:
            raise self.error
        return self.tokens


