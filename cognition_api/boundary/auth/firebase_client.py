"""
Firebase client for ID token verification.

Loads the service account from settings (JSON string, explicit path, then
the default file next to the process) and verifies bearer tokens issued to
the frontend. Without credentials the client stays uninitialised and every
token is rejected.

Dependencies: firebase_admin
System role: API-level identity verification
"""

import json
import logging
from pathlib import Path
from typing import Any

import firebase_admin
from firebase_admin import auth, credentials
from fastapi.concurrency import run_in_threadpool

from cognition_api.configs.firebase import FirebaseSettings
from cognition_api.core.exceptions import AuthenticationError

logger = logging.getLogger(__name__)


class FirebaseAuthClient:
    """Verifies Firebase ID tokens with firebase-admin."""

    def __init__(self, settings: FirebaseSettings) -> None:
        """
        Initialize the Firebase app if credentials are available.

        Args:
            settings: Firebase credential settings
        """
        self._settings = settings
        self._app: firebase_admin.App | None = self._initialize_app()

    @property
    def initialized(self) -> bool:
        return self._app is not None

    def _load_service_account(self) -> dict[str, Any] | None:
        settings = self._settings
        if settings.service_account:
            try:
                return json.loads(settings.service_account)
            except json.JSONDecodeError as e:
                logger.error("Invalid FIREBASE_SERVICE_ACCOUNT JSON", extra={"error": str(e)})
                return None

        path = settings.service_account_path or settings.default_credentials_file
        candidate = Path(path).expanduser().resolve()
        if not candidate.is_file():
            logger.warning("No Firebase service account found, skipping Firebase init")
            return None
        return json.loads(candidate.read_text(encoding="utf-8"))

    def _initialize_app(self) -> firebase_admin.App | None:
        service_account = self._load_service_account()
        if service_account is None:
            return None
        try:
            return firebase_admin.get_app()
        except ValueError:
            return firebase_admin.initialize_app(credentials.Certificate(service_account))

    async def verify_id_token(self, id_token: str) -> dict[str, Any]:
        """
        Verify an ID token and return the caller identity.

        Args:
            id_token: Raw Firebase ID token from the Authorization header

        Returns:
            dict: uid, email, name and phone of the caller

        Raises:
            AuthenticationError: If Firebase is not configured or the token is rejected
        """
        if self._app is None:
            raise AuthenticationError("Unauthorized", {"reason": "firebase_not_initialized"})

        try:
            decoded = await run_in_threadpool(auth.verify_id_token, id_token, app=self._app)
        except (ValueError, auth.InvalidIdTokenError, auth.ExpiredIdTokenError,
                auth.RevokedIdTokenError, auth.CertificateFetchError) as e:
            logger.warning("Firebase token verification failed", extra={"error": str(e)})
            raise AuthenticationError("Unauthorized", {"reason": str(e)}) from e

        return {
            "uid": decoded["uid"],
            "email": decoded.get("email"),
            "name": decoded.get("name") or decoded.get("displayName") or "",
            "phone": decoded.get("phone_number") or "",
        }
