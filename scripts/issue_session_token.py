"""Mint a development session credential for a registry user."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Issue a session token signed with the registry session secret.")
    parser.add_argument("user_id", help="Subject (user id) of the session.")
    parser.add_argument("username", help="Username claim.")
    parser.add_argument("--email", default=None)
    parser.add_argument("--display-name", default=None)
    parser.add_argument("--admin", action="store_true", help="Grant the package_admin role.")
    parser.add_argument("--ttl", type=int, default=None, help="Lifetime in seconds.")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

    from registry_api.auth.context import ADMIN_ROLE
    from registry_api.auth.identity_provider import issue_session_token

    token, expires_in = issue_session_token(
        user_id=args.user_id,
        username=args.username,
        email=args.email,
        display_name=args.display_name,
        role=ADMIN_ROLE if args.admin else None,
        ttl_seconds=args.ttl,
    )
    print(token)
    print(f"expires in {expires_in}s", file=sys.stderr)


if __name__ == "__main__":
    main()
