"""
Authentication dependencies for FastAPI.

This module provides the authorization gate protecting identity-scoped routes.
"""

from typing import Optional
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from parcel_delivery.app.core.exceptions import AuthenticationError, ForbiddenError
from parcel_delivery.app.core.jwt import Identity, TokenVerifier, TokenVerificationError

# HTTP Bearer security scheme; failures are raised by the gate itself
security = HTTPBearer(auto_error=False)


def get_token_verifier(request: Request) -> TokenVerifier:
    """FastAPI dependency returning the verifier created at startup."""
    return request.app.state.token_verifier


async def get_current_identity(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    verifier: TokenVerifier = Depends(get_token_verifier),
) -> Identity:
    """
    FastAPI dependency implementing the authorization gate.

    1. Missing or malformed ``Authorization`` header -> 401
    2. Token rejected by the verifier -> 403
    3. Otherwise the resolved identity is attached to ``request.state``

    The gate only authenticates. Handlers compare the identity against
    the resource owner themselves (see ``OwnershipGuard``).

    Returns:
        Identity of the caller
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError()

    try:
        identity = verifier.verify(credentials.credentials)
    except TokenVerificationError:
        raise ForbiddenError()

    request.state.identity = identity
    return identity
