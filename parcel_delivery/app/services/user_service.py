"""
User and role management.
"""

import logging
from typing import Any, Dict, Optional, Tuple
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError

from parcel_delivery.app.core.emails import normalize_email
from parcel_delivery.app.core.exceptions import ValidationError, ResourceNotFoundError
from parcel_delivery.app.models.user import User
from parcel_delivery.app.models.enums import UserRole, ASSIGNABLE_ROLES
from parcel_delivery.app.services.audit import log_event, AuditAction

logger = logging.getLogger(__name__)

SEARCH_LIMIT = 10


async def upsert_user(
    db: AsyncSession,
    email: str,
    profile: Dict[str, Any]
) -> Optional[int]:
    """
    Insert a user unless one with the same email exists.

    An existing user is left untouched. A concurrent insert of the same
    email loses on the unique index and is reported as existing too.

    Returns:
        ID of the new user, or None if the email was already registered
    """
    email = normalize_email(email)
    result = await db.execute(select(User.id).where(User.email == email))
    if result.scalar_one_or_none() is not None:
        return None

    user = User(email=email, profile=profile)
    db.add(user)
    try:
        await db.flush()
        await log_event(
            db,
            action=AuditAction.USER_CREATED,
            actor_email=email,
            target_type="user",
            target_id=user.id,
            commit=False
        )
        await db.commit()
    except IntegrityError:
        await db.rollback()
        logger.info("User %s was created concurrently, skipping insert", email)
        return None

    return user.id


async def get_role(db: AsyncSession, email: str) -> UserRole:
    """
    Look up a user's role.

    Raises:
        ResourceNotFoundError: No user has this email

    Returns:
        The stored role, USER when none was ever set
    """
    result = await db.execute(select(User).where(User.email == normalize_email(email)))
    user = result.scalar_one_or_none()

    if not user:
        raise ResourceNotFoundError("User")

    return user.role or UserRole.USER


async def set_role(
    db: AsyncSession,
    user_id: int,
    role: str,
    actor_email: Optional[str] = None
) -> Tuple[int, int]:
    """
    Change a user's role to ``admin`` or ``user``.

    RIDER is only granted by activating a rider application.

    Raises:
        ValidationError: Role is not assignable; nothing is written

    Returns:
        (matched_count, modified_count)
    """
    try:
        new_role = UserRole(role)
    except ValueError:
        raise ValidationError("Invalid role", details={"allowed": [r.value for r in ASSIGNABLE_ROLES]})

    if new_role not in ASSIGNABLE_ROLES:
        raise ValidationError("Invalid role", details={"allowed": [r.value for r in ASSIGNABLE_ROLES]})

    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()
    if not user:
        return 0, 0

    previous_role = user.role
    if previous_role == new_role:
        return 1, 0

    await db.execute(
        update(User)
        .where(User.id == user_id)
        .values(role=new_role)
        .execution_options(synchronize_session=False)
    )
    await log_event(
        db,
        action=AuditAction.ROLE_CHANGED,
        actor_email=actor_email,
        target_type="user",
        target_id=user_id,
        metadata={
            "previous_role": previous_role.value if previous_role else None,
            "new_role": new_role.value
        },
        commit=False
    )
    await db.commit()

    return 1, 1


async def search_users(db: AsyncSession, partial_email: str) -> list[User]:
    """
    Case-insensitive substring search on email, capped at SEARCH_LIMIT.

    LIKE wildcards in the input match literally.

    Raises:
        ValidationError: Query is blank
    """
    term = (partial_email or "").strip()
    if not term:
        raise ValidationError("Missing email query")

    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    query = (
        select(User)
        .where(User.email.ilike(f"%{escaped}%", escape="\\"))
        .order_by(User.id)
        .limit(SEARCH_LIMIT)
    )

    result = await db.execute(query)
    return list(result.scalars().all())
