"""
Create a user (e.g. an extra admin) without going through the API. Run from project root:
  python -m filmoteca.scripts.create_user USERNAME EMAIL PASSWORD [role]
Example:
  python -m filmoteca.scripts.create_user ana ana@example.com your-secure-password admin
"""
import argparse
import logging
import sys

from filmoteca.core.config import get_settings
from filmoteca.core.context import AppContext
from filmoteca.core.errors import ConflictError, ValidationError
from filmoteca.models.user import ROLE_EDITOR, ROLES
from filmoteca.services.users import UserStore

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None, ctx: AppContext | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a Filmoteca user.")
    parser.add_argument("username", help="Username (3-30 chars)")
    parser.add_argument("email", help="Email address")
    parser.add_argument("password", help="Password (6-128 chars)")
    parser.add_argument("role", nargs="?", default=ROLE_EDITOR, choices=sorted(ROLES))
    args = parser.parse_args(argv)

    owns_ctx = ctx is None
    if ctx is None:
        ctx = AppContext.from_settings(get_settings())
    db = ctx.session_factory()
    try:
        store = UserStore(db, bcrypt_rounds=ctx.settings.BCRYPT_ROUNDS)
        try:
            user = store.create(args.username, args.email, args.password, role=args.role)
        except ValidationError as e:
            for field, message in (e.errors or {}).items():
                print(f"{field}: {message}", file=sys.stderr)
            return 1
        except ConflictError as e:
            print(e.message, file=sys.stderr)
            return 1
        print(f"Created user '{user.username}' with role '{user.role}'.")
        return 0
    finally:
        db.close()
        if owns_ctx:
            ctx.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s %(message)s")
    sys.exit(main())
