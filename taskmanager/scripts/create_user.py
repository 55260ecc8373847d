"""
Create a user (e.g. the first admin). Self-registration only creates REGULAR users,
so this is how the first ADMIN comes to exist. Run from project root:
  python -m taskmanager.scripts.create_user USERNAME EMAIL PASSWORD [role]
Example:
  python -m taskmanager.scripts.create_user admin admin@example.com your-secure-password ADMIN
"""
import argparse
import logging
import sys

from pydantic import ValidationError

from taskmanager.core.config import get_settings
from taskmanager.core.database import SessionLocal
from taskmanager.core.errors import DuplicateResourceError
from taskmanager.core.logging import configure_logging
from taskmanager.core.security import PASSWORD_MAX_LEN, PASSWORD_MIN_LEN, USERNAME_MAX_LEN
from taskmanager.models import Role
from taskmanager.schemas.user import UserCreate
from taskmanager.services.users import insert_user

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a Task Manager user.")
    parser.add_argument("username", help=f"Username (1-{USERNAME_MAX_LEN} chars)")
    parser.add_argument("email", help="Email address (unique)")
    parser.add_argument("password", help=f"Password ({PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} chars)")
    parser.add_argument(
        "role",
        nargs="?",
        default=Role.REGULAR.value,
        type=str.upper,
        choices=[r.value for r in Role],
    )
    args = parser.parse_args(argv)
    configure_logging(get_settings())

    try:
        body = UserCreate(
            username=args.username.strip(),
            email=args.email.strip(),
            password=args.password,
            role=Role(args.role),
        )
    except ValidationError as e:
        for err in e.errors():
            field = ".".join(str(part) for part in err["loc"]) or "input"
            print(f"Invalid {field}: {err['msg']}", file=sys.stderr)
        return 1

    db = SessionLocal()
    try:
        user = insert_user(db, body.username, str(body.email), body.password, body.role)
    except DuplicateResourceError as e:
        print(e.message, file=sys.stderr)
        return 1
    finally:
        db.close()
    print(f"Created user '{user.username}' with role '{user.role.value}'.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
