"""Opaque token bundle returned by a successful sign-in."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from jose import jwt  # type: ignore[import]
from jose.exceptions import JWTError  # type: ignore[import]


@dataclass(frozen=True, slots=True)
class CognitoSession:
    """Tokens issued by the user pool.

    The client hands this back untouched; callers own its lifecycle. Token
    bodies are kept out of ``repr`` so sessions can be logged safely.
    """

    id_token: str = field(repr=False)
    access_token: str = field(repr=False)
    refresh_token: Optional[str] = field(default=None, repr=False)
    expires_in: Optional[int] = None
    token_type: Optional[str] = None

    @classmethod
    def from_authentication_result(cls, result: Mapping[str, Any]) -> "CognitoSession":
        expires_in = result.get("ExpiresIn")
        return cls(
            id_token=result.get("IdToken") or "",
            access_token=result.get("AccessToken") or "",
            refresh_token=result.get("RefreshToken"),
            expires_in=int(expires_in) if expires_in is not None else None,
            token_type=result.get("TokenType"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "IdToken": self.id_token,
            "AccessToken": self.access_token,
            "RefreshToken": self.refresh_token,
            "ExpiresIn": self.expires_in,
            "TokenType": self.token_type,
        }

    def claims(self, token: str = "id") -> Dict[str, Any]:
        """Return unverified claims of the id or access token.

        Signature checks belong to whoever consumes the token.
        """

        if token not in ("id", "access"):
            raise ValueError("token must be 'id' or 'access'")
        raw = self.id_token if token == "id" else self.access_token
        return jwt.get_unverified_claims(raw)

    def is_valid(self, now: Optional[float] = None, *, clock_skew_s: int = 0) -> bool:
        """True while both the id and access tokens are unexpired."""

        current = time.time() if now is None else now
        for kind in ("id", "access"):
            try:
                exp = self.claims(kind).get("exp")
            except JWTError:
                return False
            if exp is None or current - clock_skew_s >= float(exp):
                return False
        return True
