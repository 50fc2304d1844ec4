"""
Authentication module for Clerk session tokens.

This module provides:
- JWT verification (RS256) against a configured PEM key or Clerk's JWKS
- extraction of the caller identity (the token ``sub``)
- the header helpers used by the API dependencies
"""

import logging
from typing import Any, Dict, Optional, Sequence

import jwt

from ..config import CONFIG
from ..errors import AuthenticationRequired


logger = logging.getLogger(__name__)

_ALGORITHMS = ["RS256"]


class ClerkAuthManager:
    """Verifies Clerk-issued session tokens."""

    def __init__(
        self,
        *,
        jwt_key: Optional[str] = None,
        jwks_url: Optional[str] = None,
        issuer: Optional[str] = None,
        authorized_parties: Optional[Sequence[str]] = None,
    ):
        """Initialize from explicit arguments, falling back to ``CONFIG``."""
        self.jwt_key = jwt_key if jwt_key is not None else CONFIG.clerk_jwt_key
        self.jwks_url = jwks_url if jwks_url is not None else CONFIG.clerk_jwks_url
        self.issuer = issuer if issuer is not None else CONFIG.clerk_issuer
        parties = authorized_parties if authorized_parties is not None else CONFIG.clerk_authorized_parties
        self.authorized_parties = tuple(parties or ())

        if not self.jwt_key and not self.jwks_url:
            raise ValueError("CLERK_JWT_KEY or CLERK_JWKS_URL environment variable is required")

        self._jwks_client: Optional[jwt.PyJWKClient] = None
        if not self.jwt_key:
            self._jwks_client = jwt.PyJWKClient(self.jwks_url)

    def _signing_key(self, token: str) -> Any:
        if self.jwt_key:
            return self.jwt_key
        return self._jwks_client.get_signing_key_from_jwt(token).key

    def verify_jwt_token(self, token: str) -> Optional[Dict[str, Any]]:
        """
        Verify and decode a Clerk session token.

        Args:
            token: The JWT token to verify

        Returns:
            Decoded token payload if valid, None if invalid
        """
        if not token:
            logger.debug("verify_jwt_token received empty token")
            return None
        try:
            payload = jwt.decode(
                token,
                self._signing_key(token),
                algorithms=_ALGORITHMS,
                issuer=self.issuer or None,
                options={"require": ["exp", "sub"], "verify_aud": False},
            )
        except jwt.PyJWTError as exc:
            logger.debug("JWT verification failed: %s", exc)
            return None

        azp = payload.get("azp")
        if self.authorized_parties and azp and azp not in self.authorized_parties:
            logger.warning("Rejecting token issued for unexpected party %s", azp)
            return None
        return payload

    def get_user_from_token(self, token: str) -> Optional[Dict[str, Any]]:
        """
        Extract user information from a valid JWT token.

        Args:
            token: The JWT token

        Returns:
            User information dict or None if invalid
        """
        payload = self.verify_jwt_token(token)
        if not payload:
            return None

        return {
            "id": payload.get("sub"),
            "email": payload.get("email"),
            "metadata": payload.get("metadata") or {},
        }

    def authenticate_request_token(self, authorization_header: Optional[str]) -> Optional[str]:
        """
        Extract and validate the JWT from an Authorization header.

        Returns:
            User ID if valid, None if invalid
        """
        if not authorization_header or not authorization_header.startswith("Bearer "):
            return None

        token = authorization_header[7:].strip()
        user_info = self.get_user_from_token(token)
        return user_info.get("id") if user_info else None


AuthManager = ClerkAuthManager


# Global auth manager instance
_auth_manager: Optional[AuthManager] = None


def get_auth_manager() -> AuthManager:
    """Get the global AuthManager instance."""
    global _auth_manager
    if _auth_manager is None:
        _auth_manager = AuthManager()
    return _auth_manager


def resolve_identity(authorization: Optional[str]) -> Optional[str]:
    """Return the caller's user id, or None when the header is missing or invalid."""
    if not authorization:
        return None
    return get_auth_manager().authenticate_request_token(authorization)


def require_auth(authorization: Optional[str] = None) -> str:
    """
    Resolve the caller or fail closed.

    Raises:
        AuthenticationRequired: If the header is missing or the token is invalid
    """
    if not authorization:
        raise AuthenticationRequired("Authorization header required")

    user_id = resolve_identity(authorization)
    if not user_id:
        raise AuthenticationRequired("Invalid or expired token")

    return user_id
