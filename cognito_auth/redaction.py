"""Masking helpers for log context emitted by the auth client."""

from __future__ import annotations

import hashlib
import os
from typing import Any, Callable, Dict, Mapping


Redactor = Callable[[str, Any], Any]

_SALT_ENV = "COGNITO_LOG_REDACTION_SALT"


def build_hash_redactor(salt: str) -> Redactor:
    """Create a redactor that replaces values with a deterministic keyed hash."""

    key = salt.encode("utf-8", "ignore")[:64] if salt else b""

    def _hash_redactor(field: str, value: Any) -> str:
        hasher = hashlib.blake2b(f"{field}:{value}".encode("utf-8", "ignore"), digest_size=10, key=key)
        return f"redacted:{hasher.hexdigest()}"

    return _hash_redactor


def mask_token(_key: str, value: Any) -> str:
    text = str(value)
    if len(text) <= 8:
        return "***"
    return f"{text[:4]}...{text[-4:]}"


def mask_email(_key: str, value: Any) -> str:
    text = str(value)
    if "@" not in text:
        return mask_token(_key, text)
    local, _, domain = text.partition("@")
    masked_local = local[0] + "***" if local else "***"
    return f"{masked_local}@{domain}"


def _field_redactors(hash_redactor: Redactor) -> Dict[str, Redactor]:
    return {
        "email": mask_email,
        "password": hash_redactor,
        "new_password": hash_redactor,
        "code": hash_redactor,
        "confirmation_code": hash_redactor,
        "id_token": mask_token,
        "access_token": mask_token,
        "refresh_token": mask_token,
    }


_REDACTORS = _field_redactors(build_hash_redactor(os.getenv(_SALT_ENV, "")))


def redact(fields: Mapping[str, Any]) -> Dict[str, Any]:
    """Return a copy of ``fields`` safe to log. ``None`` values pass through."""

    return {
        key: _REDACTORS[key](key, value) if key in _REDACTORS and value is not None else value
        for key, value in fields.items()
    }
