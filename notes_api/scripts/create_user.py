"""
Create a user (e.g. the first admin). Run from project root:
  python -m notes_api.scripts.create_user EMAIL NAME PASSWORD [--role ROLE ...]
Example:
  python -m notes_api.scripts.create_user admin@example.com "Admin" 'Adm1n#pass' --role ROLE_ADMIN
"""
import argparse
import sys

from notes_api.core.database import SessionLocal
from notes_api.core.security import hash_password
from notes_api.models import Role, User
from notes_api.services.validation import validate_user_create


def main() -> int:
    parser = argparse.ArgumentParser(description="Create a Notes API user with the given roles.")
    parser.add_argument("email", help="Login email (unique)")
    parser.add_argument("name", help="Display name (3-255 chars)")
    parser.add_argument("password", help="Password (8-15 chars, letter + digit + special)")
    parser.add_argument(
        "--role",
        action="append",
        choices=Role.names(),
        help="Role to grant; repeat for several. Defaults to ROLE_USER.",
    )
    args = parser.parse_args()

    violations = validate_user_create(args.name, args.email, args.password)
    if violations:
        for v in violations:
            print(f"{v.field}: {v.message}", file=sys.stderr)
        return 1

    roles = args.role or [Role.BASE.value]
    db = SessionLocal()
    try:
        existing = db.query(User).filter(User.email == args.email).first()
        if existing:
            print(f"User '{args.email}' already exists.", file=sys.stderr)
            return 1
        user = User(
            name=args.name.strip(),
            email=args.email,
            password_hash=hash_password(args.password),
        )
        user.set_roles(roles)
        db.add(user)
        db.commit()
        print(f"Created user '{args.email}' with roles {', '.join(sorted(roles))}.")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
