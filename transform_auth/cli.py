"""Bootstrap admin accounts directly against the configured database.

Usage:
    transform-auth-admin find <name-or-email>
    transform-auth-admin promote <email>

Day-to-day promotions go through ``POST /api/users/{id}/promote``; this
command exists so the very first admin can be created.
"""
import argparse
import sys

import structlog

from .domain.entities import Role
from .domain.errors import ValidationError
from .infrastructure.db import SessionLocal, engine
from .infrastructure.models import Base
from .infrastructure.repositories import UserRepository
from .application.use_cases.register_user import normalize_email

logger = structlog.get_logger()


def _describe(user) -> str:
    return f"{user.id}\t{user.name}\t{user.email}\t{user.role.value}"


def find(repo: UserRepository, term: str) -> int:
    users = repo.search(term)
    if not users:
        print(f"No users found with name/email: {term}", file=sys.stderr)
        return 1
    for user in users:
        print(_describe(user))
    return 0


def promote(repo: UserRepository, email: str) -> int:
    try:
        creds = repo.get_by_email(normalize_email(email))
    except ValidationError:
        print(f"Not a valid email: {email}", file=sys.stderr)
        return 1
    if creds is None:
        print(f"User '{email}' not found", file=sys.stderr)
        return 1
    if creds.user.is_admin:
        print(f"{email} is already an admin")
        return 0
    user = repo.set_role(creds.user.id, Role.ADMIN)
    logger.info("user_promoted", actor_id="cli", target_id=user.id)
    print(_describe(user))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="transform-auth-admin", description=__doc__.splitlines()[0])
    sub = parser.add_subparsers(dest="command", required=True)
    p_find = sub.add_parser("find", help="look a user up by name or email")
    p_find.add_argument("term")
    p_promote = sub.add_parser("promote", help="give a user the admin role")
    p_promote.add_argument("email")
    return parser


def main(argv: list[str] | None = None, session_factory=SessionLocal) -> int:
    args = build_parser().parse_args(argv)
    Base.metadata.create_all(bind=engine)
    db = session_factory()
    try:
        repo = UserRepository(db)
        if args.command == "find":
            return find(repo, args.term)
        return promote(repo, args.email)
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
