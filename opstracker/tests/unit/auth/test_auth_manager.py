"""Tests for Clerk session token verification."""

from __future__ import annotations

import time

import jwt
import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from opstracker.auth import manager as auth_module
from opstracker.auth.manager import ClerkAuthManager
from opstracker.errors import AuthenticationRequired


@pytest.fixture(scope="module")
def rsa_keys():
    private_key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    public_pem = private_key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )
    return private_key, public_pem.decode("utf-8")


def _token(private_key, **claims) -> str:
    payload = {"sub": "user_123", "exp": int(time.time()) + 60, **claims}
    return jwt.encode(payload, private_key, algorithm="RS256")


def test_valid_token_resolves_subject(rsa_keys) -> None:
    private_key, public_pem = rsa_keys
    manager = ClerkAuthManager(jwt_key=public_pem, issuer="", authorized_parties=())

    assert manager.authenticate_request_token(f"Bearer {_token(private_key)}") == "user_123"


def test_expired_token_is_rejected(rsa_keys) -> None:
    private_key, public_pem = rsa_keys
    manager = ClerkAuthManager(jwt_key=public_pem, issuer="", authorized_parties=())

    token = _token(private_key, exp=int(time.time()) - 120)

    assert manager.verify_jwt_token(token) is None


def test_issuer_mismatch_is_rejected(rsa_keys) -> None:
    private_key, public_pem = rsa_keys
    manager = ClerkAuthManager(jwt_key=public_pem, issuer="https://clerk.example.test", authorized_parties=())

    assert manager.verify_jwt_token(_token(private_key, iss="https://evil.example")) is None
    assert manager.verify_jwt_token(_token(private_key, iss="https://clerk.example.test")) is not None


def test_unauthorized_party_is_rejected(rsa_keys) -> None:
    private_key, public_pem = rsa_keys
    manager = ClerkAuthManager(jwt_key=public_pem, issuer="", authorized_parties=("https://app.example",))

    assert manager.verify_jwt_token(_token(private_key, azp="https://other.example")) is None
    assert manager.verify_jwt_token(_token(private_key, azp="https://app.example")) is not None


def test_header_without_bearer_prefix(rsa_keys) -> None:
    private_key, public_pem = rsa_keys
    manager = ClerkAuthManager(jwt_key=public_pem, issuer="", authorized_parties=())

    assert manager.authenticate_request_token(_token(private_key)) is None


def test_missing_key_configuration(monkeypatch: pytest.MonkeyPatch) -> None:
    with pytest.raises(ValueError):
        ClerkAuthManager(jwt_key="", jwks_url="")


def test_require_auth(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(auth_module, "resolve_identity", lambda header: "user_1" if header == "Bearer ok" else None)

    assert auth_module.require_auth("Bearer ok") == "user_1"
    with pytest.raises(AuthenticationRequired) as missing:
        auth_module.require_auth(None)
    with pytest.raises(AuthenticationRequired) as invalid:
        auth_module.require_auth("Bearer bad")

    assert missing.value.message == "Authorization header required"
    assert invalid.value.message == "Invalid or expired token"
