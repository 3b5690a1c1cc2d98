from __future__ import annotations

import os
import re
from dataclasses import dataclass
from typing import Mapping, Optional

from .exceptions import ServiceConfigurationError


_USER_POOL_ID_RE = re.compile(r"^([\w-]+)_[0-9a-zA-Z]+$")


def region_from_user_pool_id(user_pool_id: str) -> str:
    """Return the region prefix of a user pool id (``us-east-1_AbC123``)."""

    match = _USER_POOL_ID_RE.match(user_pool_id or "")
    if not match:
        raise ServiceConfigurationError("Invalid UserPoolId format.")
    return match.group(1)


@dataclass(frozen=True, slots=True)
class CognitoConfig:
    """Cognito user pool connection settings."""

    region: str
    user_pool_id: str
    client_id: str
    endpoint_url: Optional[str] = None
    connect_timeout_s: float = 5.0
    read_timeout_s: float = 10.0
    # Worker threads running blocking SDK calls
    max_workers: int = 4

    def __post_init__(self) -> None:
        if not self.user_pool_id or not self.client_id:
            raise ServiceConfigurationError("Both UserPoolId and ClientId are required.")
        if not self.region:
            raise ServiceConfigurationError("Region is required.")
        pool_region = region_from_user_pool_id(self.user_pool_id)
        if pool_region != self.region:
            raise ServiceConfigurationError(
                f"UserPoolId region '{pool_region}' does not match region '{self.region}'"
            )
        if self.max_workers < 1:
            raise ServiceConfigurationError("max_workers must be at least 1")

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> "CognitoConfig":
        env = env if env is not None else os.environ
        user_pool_id = (env.get("COGNITO_USER_POOL_ID") or "").strip()
        region = (env.get("COGNITO_REGION") or "").strip()
        if not region and user_pool_id:
            region = region_from_user_pool_id(user_pool_id)
        return cls(
            region=region,
            user_pool_id=user_pool_id,
            client_id=(env.get("COGNITO_CLIENT_ID") or "").strip(),
            endpoint_url=env.get("COGNITO_ENDPOINT_URL") or None,
            connect_timeout_s=float(env.get("COGNITO_CONNECT_TIMEOUT_S", "5")),
            read_timeout_s=float(env.get("COGNITO_READ_TIMEOUT_S", "10")),
            max_workers=int(env.get("COGNITO_MAX_WORKERS", "4")),
        )
