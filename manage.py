"""
One-off maintenance commands for the store database.

    python manage.py create-admin
    python manage.py reset-admin --email admin@kaayalife.com
    python manage.py list-users
    python manage.py check-login --email admin@kaayalife.com
    python manage.py seed-categories
    python manage.py cleanup-subcategories
    python manage.py import-products --count 100 --category Skincare
"""

import argparse
import getpass
import logging
import sys

from pymongo.errors import PyMongoError

from config import setup_logging
from database import close_client, ensure_indexes, get_db
from product_import import TEMPLATES, generate_products
from seed import cleanup_duplicate_subcategories, seed_category_tree
from users import authenticate, create_user, list_users, reset_password

logger = logging.getLogger("manage")

DEFAULT_ADMIN_EMAIL = "admin@kaayalife.com"
DEFAULT_ADMIN_PASSWORD = "admin123"


def create_admin(db, args):
    user_id = create_user(db, args.name, args.email, args.password, role="admin")
    if user_id is None:
        print("Admin user already exists")
        return 0
    print("Admin user created successfully:")
    print(f"Email: {args.email}")
    print("Role: admin")
    return 0


def reset_admin(db, args):
    email = args.email or input("Enter admin email: ")
    password = args.password or getpass.getpass("Enter admin password: ")
    if reset_password(db, email, password):
        print(f"Password reset for {email}")
        return 0
    name = args.name or input("Enter admin name: ")
    create_user(db, name, email, password, role="admin")
    print(f"Admin created successfully: {email}")
    return 0


def show_users(db, args):
    users = list_users(db)
    print("Users in database:")
    for user in users:
        print(f"Email: {user['email']}, Role: {user.get('role')}, Active: {user.get('isActive', True)}")
    return 0


def check_login(db, args):
    password = args.password or getpass.getpass("Password: ")
    user = authenticate(db, args.email, password)
    if user is None:
        print("Invalid credentials")
        return 1
    print(f"Login OK: {user['email']} ({user.get('role')})")
    return 0


def seed_categories(db, args):
    result = seed_category_tree(db)
    print(f"Main categories created: {result['created']}, updated: {result['updated']}")
    print(f"Subcategories created: {result['subcategories']}")
    if result["skipped"]:
        print(f"Subcategories skipped (name used elsewhere): {result['skipped']}")
    return 0


def cleanup_subcategories(db, args):
    removed = cleanup_duplicate_subcategories(db)
    print(f"Cleanup complete. Removed {removed} duplicate subcategories.")
    # legacy duplicates block the unique name index until they are gone
    ensure_indexes(db)
    return 0


def import_products(db, args):
    try:
        products = generate_products(args.count, categories=args.category)
    except ValueError as e:
        print(e, file=sys.stderr)
        return 2
    if args.clear:
        deleted = db["product"].delete_many({}).deleted_count
        logger.info("Cleared %d existing products", deleted)
    if products:
        db["product"].insert_many(products)
    print(f"Successfully imported {len(products)} products")
    print(f"Total products in database: {db['product'].count_documents({})}")
    return 0


def build_parser():
    parser = argparse.ArgumentParser(description="Kaaya store maintenance commands")
    commands = parser.add_subparsers(dest="command", required=True)

    p = commands.add_parser("create-admin", help="create the default admin user")
    p.add_argument("--name", default="Admin User")
    p.add_argument("--email", default=DEFAULT_ADMIN_EMAIL)
    p.add_argument("--password", default=DEFAULT_ADMIN_PASSWORD)
    p.set_defaults(handler=create_admin)

    p = commands.add_parser("reset-admin", help="reset an admin password, creating the admin if missing")
    p.add_argument("--name")
    p.add_argument("--email")
    p.add_argument("--password")
    p.set_defaults(handler=reset_admin)

    p = commands.add_parser("list-users", help="list users without their password hashes")
    p.set_defaults(handler=show_users)

    p = commands.add_parser("check-login", help="verify a user's credentials")
    p.add_argument("--email", required=True)
    p.add_argument("--password")
    p.set_defaults(handler=check_login)

    p = commands.add_parser("seed-categories", help="create the category tree with subcategories")
    p.set_defaults(handler=seed_categories)

    p = commands.add_parser("cleanup-subcategories", help="delete duplicate subcategories under the same parent")
    p.set_defaults(handler=cleanup_subcategories, indexes_first=False)

    p = commands.add_parser("import-products", help="generate synthetic products")
    p.add_argument("--count", type=int, default=50)
    p.add_argument("--category", action="append", choices=sorted(TEMPLATES),
                   help="limit generation to this category (repeatable)")
    p.add_argument("--clear", action="store_true", help="delete existing products first")
    p.set_defaults(handler=import_products)
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    setup_logging()
    db = get_db()
    if db is None:
        print("MONGODB_URI is not set", file=sys.stderr)
        return 1
    try:
        if getattr(args, "indexes_first", True):
            ensure_indexes(db)
        return args.handler(db, args)
    except PyMongoError as e:
        logger.error(f"Database error: {e}")
        return 1
    finally:
        close_client()


if __name__ == "__main__":
    sys.exit(main())
