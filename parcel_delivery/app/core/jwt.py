"""
Identity token verification.

Tokens are issued by an external identity provider. This module only checks
them and extracts the resolved identity (the subject email).
"""

from dataclasses import dataclass, field
from typing import Optional, Dict, Any, List
from jose import JWTError, jwt
from parcel_delivery.app.core.config import settings


class TokenVerificationError(Exception):
    """Raised when a presented token cannot be accepted."""


@dataclass(frozen=True)
class Identity:
    """Resolved identity of the caller."""
    email: str
    subject: Optional[str] = None
    claims: Dict[str, Any] = field(default_factory=dict)


class TokenVerifier:
    """
    Capability that turns a bearer token into an Identity.

    Implementations raise TokenVerificationError for expired, forged,
    revoked or otherwise unacceptable tokens.
    """

    def verify(self, token: str) -> Identity:
        raise NotImplementedError


class JoseTokenVerifier(TokenVerifier):
    """
    Verify identity-provider tokens with python-jose.

    Args:
        key: Shared secret or provider public key
        algorithms: Accepted signing algorithms
        audience: Expected ``aud`` claim (skipped when None)
        issuer: Expected ``iss`` claim (skipped when None)
        email_claim: Claim holding the subject email
    """

    def __init__(
        self,
        key: str,
        algorithms: List[str],
        audience: Optional[str] = None,
        issuer: Optional[str] = None,
        email_claim: str = "email",
    ):
        self.key = key
        self.algorithms = algorithms
        self.audience = audience
        self.issuer = issuer
        self.email_claim = email_claim

    def verify(self, token: str) -> Identity:
        try:
            payload = jwt.decode(
                token,
                self.key,
                algorithms=self.algorithms,
                audience=self.audience,
                issuer=self.issuer,
                options={"verify_aud": self.audience is not None},
            )
        except JWTError as e:
            raise TokenVerificationError(str(e)) from e

        email = payload.get(self.email_claim)
        if not email:
            raise TokenVerificationError(f"Token has no '{self.email_claim}' claim")

        return Identity(email=email, subject=payload.get("sub"), claims=payload)


def build_token_verifier() -> TokenVerifier:
    """Create the verifier configured in settings."""
    return JoseTokenVerifier(
        key=settings.identity_verification_key,
        algorithms=settings.identity_algorithms,
        audience=settings.identity_audience,
        issuer=settings.identity_issuer,
        email_claim=settings.identity_email_claim,
    )
