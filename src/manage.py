"""Storefront management CLI.

Creates and drops database schemas for both domains and grants roles to
users.

Usage:
    python src/manage.py setup-db                       # Create all tables
    python src/manage.py drop-db --domain store         # Drop store tables only
    python src/manage.py grant-role <user_id> ADMIN     # Make a user an admin
"""

import argparse
import sys

from shared.db import drop_db, setup_db

DOMAIN_NAMES = ["identity", "store"]


def _domains(names=None):
    from identity.domain import identity
    from store.domain import store

    all_domains = {"identity": identity, "store": store}
    return {name: all_domains[name] for name in names} if names else all_domains


def setup_databases(domains=None):
    """Create database schemas for the specified (or all) domains."""
    for name, domain in _domains(domains).items():
        print(f"Initializing {name} domain...")
        domain.init()
        print(f"Creating {name} database schema...")
        setup_db(domain)
        print(f"  {name} schema ready.")

    print("Done.")


def drop_databases(domains=None):
    """Drop database schemas for the specified (or all) domains."""
    for name, domain in _domains(domains).items():
        print(f"Initializing {name} domain...")
        domain.init()
        print(f"Dropping {name} database schema...")
        drop_db(domain)
        print(f"  {name} schema dropped.")

    print("Done.")


def grant_role(user_id, role):
    """Grant `role` to a user; returns the user's roles afterwards.

    Expects an initialized identity domain.
    """
    from identity.domain import identity
    from identity.user.roles import GrantRole

    with identity.domain_context():
        roles = identity.process(GrantRole(user_id=user_id, role=role), asynchronous=False)

    print(f"User {user_id} now has roles: {', '.join(roles)}")
    return roles


def main():
    parser = argparse.ArgumentParser(description="Storefront management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    setup_parser = subparsers.add_parser("setup-db", help="Create all database tables")
    setup_parser.add_argument(
        "--domain",
        choices=DOMAIN_NAMES,
        nargs="*",
        help="Specific domain(s) to set up (default: all)",
    )

    drop_parser = subparsers.add_parser("drop-db", help="Drop all database tables")
    drop_parser.add_argument(
        "--domain",
        choices=DOMAIN_NAMES,
        nargs="*",
        help="Specific domain(s) to drop (default: all)",
    )

    role_parser = subparsers.add_parser("grant-role", help="Grant a role to a user")
    role_parser.add_argument("user_id")
    role_parser.add_argument("role")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_databases(args.domain)
    elif args.command == "drop-db":
        drop_databases(args.domain)
    elif args.command == "grant-role":
        from identity.domain import identity

        identity.init()
        grant_role(args.user_id, args.role)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
