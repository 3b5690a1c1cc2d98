"""Awaitable client for Cognito user-pool account lifecycle calls."""

from __future__ import annotations

import asyncio
import concurrent.futures
import json
import logging
import threading
from typing import Any, Callable, Optional, Type, TypeVar

import boto3
from botocore.config import Config as BotoConfig
from botocore.exceptions import BotoCoreError, ClientError
from pycognito.aws_srp import AWSSRP
from pycognito.exceptions import WarrantException

from .config import CognitoConfig
from .exceptions import (
    AuthenticationError,
    CognitoAuthError,
    ConfirmationError,
    PasswordResetConfirmError,
    PasswordResetRequestError,
    RegistrationError,
    ResendError,
)
from .redaction import redact
from .session import CognitoSession

logger = logging.getLogger(__name__)

T = TypeVar("T")

_PROVIDER_ERRORS: tuple[Type[BaseException], ...] = (ClientError, BotoCoreError, WarrantException)


class CognitoAuthClient:
    """Thin wrapper around the Cognito user-pool API.

    Each coroutine makes exactly one provider call on a worker thread and
    completes once, either with the result or by raising the operation's
    :class:`CognitoAuthError` subclass carrying the provider's message. No
    retries, caching or token storage happen here.

    Nothing touches the network until the first operation; the boto3 client
    and worker pool are created lazily.
    """

    def __init__(
        self,
        config: CognitoConfig,
        *,
        provider: Any = None,
        srp_factory: Optional[Callable[..., Any]] = None,
        executor: Optional[concurrent.futures.Executor] = None,
    ) -> None:
        self._config = config
        self._provider = provider
        self._srp_factory = srp_factory or AWSSRP
        self._executor = executor
        self._owns_executor = executor is None
        self._lock = threading.Lock()
        self._closed = False

    @property
    def config(self) -> CognitoConfig:
        return self._config

    @property
    def closed(self) -> bool:
        return self._closed

    # --------------------- operations ---------------------
    async def sign_up(self, username: str, password: str, email: str) -> str:
        """Register ``username``; returns it once the pool accepts the sign-up."""

        def _call() -> str:
            self._get_provider().sign_up(
                ClientId=self._config.client_id,
                Username=username,
                Password=password,
                UserAttributes=[{"Name": "email", "Value": email}],
                ValidationData=[],
            )
            return username

        return await self._run("sign_up", RegistrationError, _call, username=username, email=email)

    async def confirm_sign_up(self, username: str, code: str) -> None:
        def _call() -> None:
            self._get_provider().confirm_sign_up(
                ClientId=self._config.client_id,
                Username=username,
                ConfirmationCode=code,
                ForceAliasCreation=True,
            )

        await self._run("confirm_sign_up", ConfirmationError, _call, username=username, code=code)

    async def sign_in(self, username: str, password: str) -> CognitoSession:
        """Run the SRP password flow and return the issued session.

        Challenges beyond the password verifier (MFA, forced password change)
        are not handled and raise :class:`AuthenticationError`.
        """

        def _call() -> CognitoSession:
            srp = self._srp_factory(
                username=username,
                password=password,
                pool_id=self._config.user_pool_id,
                client_id=self._config.client_id,
                client=self._get_provider(),
            )
            tokens = srp.authenticate_user()
            result = tokens.get("AuthenticationResult") if tokens else None
            if not result:
                raise AuthenticationError(
                    json.dumps({"ChallengeName": (tokens or {}).get("ChallengeName")}, sort_keys=True)
                )
            return CognitoSession.from_authentication_result(result)

        return await self._run(
            "sign_in",
            AuthenticationError,
            _call,
            extra_errors=(NotImplementedError,),
            username=username,
            password=password,
        )

    async def resend_confirmation_code(self, username: str) -> None:
        def _call() -> None:
            self._get_provider().resend_confirmation_code(
                ClientId=self._config.client_id,
                Username=username,
            )

        await self._run("resend_confirmation_code", ResendError, _call, username=username)

    async def forgot_password(self, username: str) -> None:
        """Ask the pool to mail a password reset code to ``username``."""

        def _call() -> None:
            self._get_provider().forgot_password(
                ClientId=self._config.client_id,
                Username=username,
            )

        await self._run("forgot_password", PasswordResetRequestError, _call, username=username)

    async def confirm_password(self, username: str, code: str, new_password: str) -> None:
        def _call() -> None:
            self._get_provider().confirm_forgot_password(
                ClientId=self._config.client_id,
                Username=username,
                ConfirmationCode=code,
                Password=new_password,
            )

        await self._run(
            "confirm_password",
            PasswordResetConfirmError,
            _call,
            username=username,
            code=code,
            new_password=new_password,
        )

    def sign_out(self, username: str) -> None:
        """Forget ``username`` locally. Tokens are not cached, so no call is made."""

        logger.debug("Cognito sign_out for %s", username)

    # --------------------- lifecycle ---------------------
    def close(self) -> None:
        with self._lock:
            self._closed = True
            executor = self._executor if self._owns_executor else None
            self._executor = None
        if executor is not None:
            executor.shutdown(wait=True)

    def __enter__(self) -> "CognitoAuthClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    async def __aenter__(self) -> "CognitoAuthClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.close()

    # --------------------- helpers ---------------------
    def _get_provider(self) -> Any:
        with self._lock:
            if self._provider is None:
                logger.debug("Creating cognito-idp client for %s", self._config.region)
                session = boto3.Session()
                self._provider = session.client(
                    "cognito-idp",
                    region_name=self._config.region,
                    endpoint_url=self._config.endpoint_url,
                    config=BotoConfig(
                        connect_timeout=self._config.connect_timeout_s,
                        read_timeout=self._config.read_timeout_s,
                        retries={"total_max_attempts": 1},
                    ),
                )
            return self._provider

    def _get_executor(self) -> concurrent.futures.Executor:
        with self._lock:
            if self._closed:
                raise RuntimeError("CognitoAuthClient is closed")
            if self._executor is None:
                self._executor = concurrent.futures.ThreadPoolExecutor(
                    max_workers=self._config.max_workers,
                    thread_name_prefix="cognito-auth",
                )
            return self._executor

    async def _run(
        self,
        operation: str,
        error_cls: Type[CognitoAuthError],
        call: Callable[[], T],
        *,
        extra_errors: tuple[Type[BaseException], ...] = (),
        **log_fields: Any,
    ) -> T:
        executor = self._get_executor()
        loop = asyncio.get_running_loop()
        context = redact(log_fields)
        logger.debug("Cognito %s started %s", operation, context)
        try:
            result = await loop.run_in_executor(executor, call)
        except _PROVIDER_ERRORS + extra_errors as exc:
            error = error_cls.from_provider(exc)
            logger.warning(
                "Cognito %s failed (%s): %s %s",
                operation,
                error.code or type(exc).__name__,
                error.message,
                context,
            )
            raise error from exc
        except CognitoAuthError as exc:
            logger.warning("Cognito %s failed: %s %s", operation, exc.message, context)
            raise
        logger.debug("Cognito %s succeeded %s", operation, context)
        return result
