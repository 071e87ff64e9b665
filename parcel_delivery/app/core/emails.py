"""
Email normalization.

Emails are the keys that tie users, parcels, payments and rider applications
together. Every email is stored in canonical form and every lookup
normalizes its input the same way.
"""

from typing import Optional


def normalize_email(email: Optional[str]) -> Optional[str]:
    """Canonical form of an email: surrounding whitespace removed, lowercased."""
    if email is None:
        return None
    return email.strip().lower()
