"""
Create an account (public registration is disabled; accounts are seeded by the admin)

Usage:
    python create_user.py 1234 "Agencia 1234" secret123 --email agencia@example.com
"""
import argparse

from app.infrastructure.db.session import get_db
from app.infrastructure.db.models import User
from app.auth import hash_password


def main() -> None:
    parser = argparse.ArgumentParser(description="Create a quiniela account")
    parser.add_argument("quiniela_number", help="Agency number, also the login name")
    parser.add_argument("display_name", help="Agency display name")
    parser.add_argument("password")
    parser.add_argument("--email", default=None)
    args = parser.parse_args()

    db = next(get_db())
    try:
        existing = db.query(User).filter(User.username == args.quiniela_number).first()
        if existing:
            print(f"User already exists: {args.quiniela_number} (ID: {existing.id})")
            return

        user = User(
            username=args.quiniela_number,
            display_name=args.display_name,
            quiniela_number=args.quiniela_number,
            email=args.email,
            password_hash=hash_password(args.password),
            is_active=True,
        )
        db.add(user)
        db.commit()
        print("Created user:")
        print(f"  Username: {user.username} (ID: {user.id})")
        print(f"  Name: {user.display_name}")
    finally:
        db.close()


if __name__ == "__main__":
    main()
