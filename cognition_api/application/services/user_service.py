"""
User service orchestrator.

Registration, self-service profile management and admin user management.

Dependencies: cognition_api.boundary.db.CRUD, cognition_api.boundary.auth
System role: User account use case orchestration
"""

import logging
from typing import Any

from motor.motor_asyncio import AsyncIOMotorDatabase

from cognition_api.boundary.auth.email_domain import check_email_domain
from cognition_api.boundary.db.CRUD.user_crud import user_crud
from cognition_api.boundary.db.serialization import serialize_document, serialize_documents
from cognition_api.core.exceptions import UserNotFoundError
from cognition_api.core.timestamps import utcnow

logger = logging.getLogger(__name__)

DEFAULT_ROLE = "student"
ADMIN_ROLE = "admin"


class UserService:
    """User service orchestrator."""

    def __init__(self, db: AsyncIOMotorDatabase) -> None:
        self.db = db

    async def register(
        self, uid: str, email: str, name: str = "", requested_role: str | None = None
    ) -> dict[str, Any]:
        """
        Register a user after checking the email domain accepts mail.

        Existing users are left untouched. Public sign-up always creates a
        student; admins are promoted through the admin API or seed script.

        Returns:
            dict: message and the user as registered

        Raises:
            InvalidEmailDomainError: If the domain has no mail exchanger
        """
        await check_email_domain(email)

        if requested_role and requested_role != DEFAULT_ROLE:
            logger.warning(
                "Ignoring role requested at sign-up",
                extra={"uid": uid, "requested_role": requested_role},
            )

        user = {
            "uid": uid,
            "email": email,
            "name": name or "",
            "role": DEFAULT_ROLE,
            "createdAt": utcnow(),
        }
        await user_crud.insert_if_absent(self.db, user)
        logger.info("User registered", extra={"uid": uid})
        return {"message": "User registered", "user": user}

    async def ensure_user(self, identity: dict[str, Any]) -> None:
        """Create the Users document for an authenticated caller if missing."""
        await user_crud.insert_if_absent(
            self.db,
            {
                "uid": identity["uid"],
                "email": identity.get("email"),
                "name": identity.get("name") or "",
                "role": DEFAULT_ROLE,
                "createdAt": utcnow(),
            },
        )

    async def is_admin(self, uid: str) -> bool:
        user = await user_crud.get_by_uid(self.db, uid)
        return bool(user) and user.get("role") == ADMIN_ROLE

    async def get_profile(self, identity: dict[str, Any]) -> dict[str, Any]:
        """Stored profile, or the token identity when no document exists yet."""
        user = await user_crud.get_by_uid(self.db, identity["uid"])
        if user is None:
            return {"uid": identity["uid"], "email": identity.get("email"), "name": identity.get("name")}
        return serialize_document(user)

    async def update_profile(self, uid: str, fields: dict[str, Any]) -> dict[str, Any]:
        user = await user_crud.update_by_uid(self.db, uid, fields, upsert=True)
        return serialize_document(user)

    async def set_avatar(self, uid: str, avatar_url: str) -> None:
        await user_crud.update_by_uid(self.db, uid, {"avatar": avatar_url}, upsert=True)

    async def list_users(self) -> list[dict[str, Any]]:
        return serialize_documents(await user_crud.find_many(self.db))

    async def get_user(self, email: str) -> dict[str, Any]:
        user = await user_crud.get_by_email(self.db, email)
        if user is None:
            raise UserNotFoundError(details={"email": email})
        return serialize_document(user)

    async def update_user(self, email: str, fields: dict[str, Any]) -> dict[str, Any]:
        user = await user_crud.update_by_email(self.db, email, fields)
        if user is None:
            raise UserNotFoundError(details={"email": email})
        return serialize_document(user)

    async def delete_user(self, email: str) -> None:
        if not await user_crud.delete_by_email(self.db, email):
            raise UserNotFoundError(details={"email": email})
        logger.info("User deleted", extra={"email": email})

    async def promote_to_admin(self, uid: str, email: str, name: str = "") -> dict[str, Any]:
        """
        Create or upgrade an admin account.

        Returns:
            dict: The stored user
        """
        user = await user_crud.update_one(
            self.db,
            {"uid": uid},
            {
                "$set": {"email": email, "role": ADMIN_ROLE, "updatedAt": utcnow()},
                "$setOnInsert": {"uid": uid, "name": name, "createdAt": utcnow()},
            },
            upsert=True,
        )
        if name and user and user.get("name") != name:
            user = await user_crud.update_by_uid(self.db, uid, {"name": name})
        logger.info("Admin user ensured", extra={"uid": uid, "email": email})
        return serialize_document(user)
