"""Storefront database management CLI.

Creates and drops the SQL schema for the storefront domain. Only the
``sqlite`` and ``production`` (PostgreSQL) environments have a schema; the
default in-memory provider needs no setup.

Usage:
    PROTEAN_ENV=sqlite python src/manage.py setup-db   # Create all tables
    PROTEAN_ENV=sqlite python src/manage.py drop-db    # Drop all tables
"""

import argparse
import os
import sys


def setup_database(env=None):
    """Create the storefront schema on every SQL-backed provider."""
    if env:
        os.environ["PROTEAN_ENV"] = env

    from storefront.domain import storefront
    from storefront.utils.db import setup_db

    print("Initializing storefront domain...")
    storefront.init()
    print("Creating storefront database schema...")
    setup_db(storefront)
    print("Done.")


def drop_database(env=None):
    """Drop the storefront schema from every SQL-backed provider."""
    if env:
        os.environ["PROTEAN_ENV"] = env

    from storefront.domain import storefront
    from storefront.utils.db import drop_db

    print("Initializing storefront domain...")
    storefront.init()
    print("Dropping storefront database schema...")
    drop_db(storefront)
    print("Done.")


def main():
    parser = argparse.ArgumentParser(description="Storefront database management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    for name, help_text in (("setup-db", "Create all database tables"), ("drop-db", "Drop all database tables")):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument(
            "--env",
            choices=["sqlite", "production"],
            help="Config environment to use (default: PROTEAN_ENV)",
        )

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database(args.env)
    elif args.command == "drop-db":
        drop_database(args.env)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
