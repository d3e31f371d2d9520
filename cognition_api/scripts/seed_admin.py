"""
Create or upgrade an admin user.

Usage:
    python -m cognition_api.scripts.seed_admin <uid> <email> [name]
"""

import logging
import sys

from cognition_api.application.services.user_service import UserService

from ._runner import run_with_database

logger = logging.getLogger(__name__)

USAGE = "Usage: python -m cognition_api.scripts.seed_admin <uid> <email> [name]"


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    if len(args) < 2:
        print(USAGE, file=sys.stderr)
        return 1

    uid, email = args[0], args[1]
    name = args[2] if len(args) > 2 else "Admin User"

    user = run_with_database(lambda db: UserService(db).promote_to_admin(uid, email, name))
    logger.info("Admin ready", extra={"uid": user.get("uid"), "email": user.get("email")})
    return 0


if __name__ == "__main__":
    sys.exit(main())
