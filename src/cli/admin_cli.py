"""
Command-line interface for Newsdesk administration.

Provides commands to create the schema, add back-office users and
inspect live coverages.

Usage:
    python -m src.cli.admin_cli init-db
    python -m src.cli.admin_cli create-user alice "Alice Martin" 's3cret-pass' admin
    python -m src.cli.admin_cli list-coverages --active
    python -m src.cli.admin_cli --help
"""

import asyncio
import argparse
import logging
import sys
from typing import List, Optional

from dotenv import load_dotenv
load_dotenv('.env')

from ..auth import PasswordError, hash_password
from ..db.repositories import LiveCoverageRepository, UserRepository
from ..db.session import Database
from ..models.team import UserRole


# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger(__name__)


async def init_db(database: Database) -> int:
    """Create every table that does not exist yet."""
    await database.initialize()
    try:
        await database.create_tables()
    finally:
        await database.close()
    print("Database tables created")
    return 0


async def create_user(
    database: Database,
    username: str,
    display_name: str,
    password: str,
    role: str
) -> int:
    """
    Add a back-office user.

    Args:
        database: Target database
        username: Unique login name
        display_name: Name shown on feed updates
        password: Plain password (hashed with bcrypt)
        role: admin, editor or user

    Returns:
        Process exit code
    """
    try:
        role = UserRole(role).value
    except ValueError:
        print(f"Unknown role '{role}' (expected one of: {', '.join(r.value for r in UserRole)})")
        return 1

    try:
        password_hash = hash_password(password)
    except PasswordError as e:
        print(f"Invalid password: {e}")
        return 1

    await database.initialize()
    try:
        async with database.session() as session:
            repo = UserRepository(session)
            if await repo.get_by_username(username):
                print(f"User '{username}' already exists")
                return 1
            user = await repo.create(
                username=username,
                password_hash=password_hash,
                display_name=display_name,
                role=role,
            )
            print(f"Created {role} '{user.username}' (id={user.id})")
    finally:
        await database.close()
    return 0


async def list_coverages(database: Database, active_only: bool) -> int:
    await database.initialize()
    try:
        async with database.session() as session:
            coverages = await LiveCoverageRepository(session).list_coverages(active_only=active_only)
    finally:
        await database.close()

    if not coverages:
        print("No live coverages")
        return 0

    for coverage in coverages:
        state = "ACTIVE" if coverage.active else "closed"
        print(f"{coverage.id:>5}  {state:<6}  {coverage.slug:<40}  {coverage.title}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Newsdesk administration",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Create tables in the configured database
  python -m src.cli.admin_cli init-db

  # Add an editor
  python -m src.cli.admin_cli create-user jdupont "Jeanne Dupont" 'long-password' editor

  # Show active coverages against a local SQLite file
  python -m src.cli.admin_cli --database sqlite+aiosqlite:///newsdesk.db list-coverages --active
        """
    )

    parser.add_argument(
        "--database",
        type=str,
        help="Database URL (default: from settings)"
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging (DEBUG level)"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("init-db", help="Create all tables")

    user_parser = subparsers.add_parser("create-user", help="Add a back-office user")
    user_parser.add_argument("username")
    user_parser.add_argument("display_name")
    user_parser.add_argument("password")
    user_parser.add_argument("role", nargs="?", default=UserRole.EDITOR.value)

    coverage_parser = subparsers.add_parser("list-coverages", help="List live coverages")
    coverage_parser.add_argument(
        "--active",
        action="store_true",
        help="Only active coverages"
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point"""
    args = build_parser().parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)
        logger.debug("Verbose logging enabled")

    database = Database(args.database)

    if args.command == "init-db":
        return asyncio.run(init_db(database))
    if args.command == "create-user":
        return asyncio.run(
            create_user(database, args.username, args.display_name, args.password, args.role)
        )
    return asyncio.run(list_coverages(database, active_only=args.active))


if __name__ == "__main__":
    sys.exit(main())
