"""
Authentication

This module provides:
- Clerk session token verification
- caller identity resolution for queries (optional) and mutations (required)
"""

from .manager import AuthManager, ClerkAuthManager, get_auth_manager, require_auth, resolve_identity

__all__ = [
    'AuthManager',
    'ClerkAuthManager',
    'get_auth_manager',
    'require_auth',
    'resolve_identity',
]
