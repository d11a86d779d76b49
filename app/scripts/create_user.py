"""
Create an account (e.g. the first admin). Run from project root:
  python -m app.scripts.create_user NAME EMAIL PASSWORD [role]
Example:
  python -m app.scripts.create_user "Site Admin" admin@example.com your-secure-password admin
"""
import argparse
import logging
import sys

from sqlalchemy.exc import SQLAlchemyError

from app.core.database import SessionLocal
from app.core.errors import ServiceError
from app.models import Role
from app.services import accounts

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Create a user-directory account (admins cannot self-register)."
    )
    parser.add_argument("name", help="Display name")
    parser.add_argument("email", help="Email (case-sensitive, must be unique)")
    parser.add_argument("password", help="Password (non-empty)")
    parser.add_argument(
        "role", nargs="?", default=Role.USER.value, choices=[r.value for r in Role]
    )
    args = parser.parse_args(argv)

    db = SessionLocal()
    try:
        account = accounts.register(db, name=args.name, email=args.email, password=args.password)
        if args.role != account.role:
            account.role = args.role
            db.commit()
        logger.info("Account created", extra={"account_id": account.id, "role": args.role})
        print(f"Created account {account.id} <{account.email}> with role '{args.role}'.")
        return 0
    except ServiceError as e:
        print(e.message, file=sys.stderr)
        return 1
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Account store failure while setting role")
        print("Account store unavailable; role was not applied.", file=sys.stderr)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
