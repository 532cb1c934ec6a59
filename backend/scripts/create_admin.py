"""
Create or promote an admin user by email.

Usage:
  python -m scripts.create_admin admin@example.com
  python -m scripts.create_admin admin@example.com mypassword "Store Admin"

If the user exists, they are promoted to admin (role=admin) and reactivated.
If not, a new admin is created with the given email and password (default: password123).

Run from backend dir. Ensure MONGODB_URI is set (e.g. in .env or export).
"""
import os
import sys
from datetime import datetime, timezone

# Ensure backend root is on path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from storefront.core.db import get_users_collection, init_db
from storefront.models.user import Role
from storefront.services.auth_service import create_user


def main():
    if len(sys.argv) < 2:
        print("Usage: python -m scripts.create_admin <email> [password] [name]")
        print("  email: required")
        print("  password: optional, default 'password123' (used only when creating a new user)")
        print("  name: optional, default 'Admin'")
        sys.exit(1)
    email = sys.argv[1].strip().lower()
    password = sys.argv[2].strip() if len(sys.argv) > 2 else "password123"
    name = sys.argv[3].strip() if len(sys.argv) > 3 else "Admin"

    init_db()
    users = get_users_collection()

    existing = users.find_one({"email": email})
    if existing:
        if existing.get("role") == Role.ADMIN.value and existing.get("is_active", True):
            print(f"User {email} is already an admin.")
            return
        users.update_one(
            {"email": email},
            {"$set": {"role": Role.ADMIN.value, "is_active": True, "updated_at": datetime.now(timezone.utc)}},
        )
        print(f"Promoted {email} to admin.")
        return

    create_user(name, email, password, Role.ADMIN)
    print(f"Created admin user {email} (password: {password}).")


if __name__ == "__main__":
    main()
