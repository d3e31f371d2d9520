"""Identity provider boundary (Firebase Authentication)."""

from cognition_api.boundary.auth.email_domain import check_email_domain
from cognition_api.boundary.auth.firebase_client import FirebaseAuthClient

__all__ = ["FirebaseAuthClient", "check_email_domain"]
