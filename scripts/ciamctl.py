"""Command-line helper for querying and administering a CIAM instance.

This module serves as a CLI wrapper around ciam.core.client services.
"""
from __future__ import annotations
import argparse
import json
import os
import sys
from pathlib import Path

import requests

SCRIPT_DIR = Path(__file__).parent
PROJECT_ROOT = SCRIPT_DIR.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from ciam.core.client import Ciam, DEFAULT_BASE_URL
from ciam.core.client.models import SUBJECT_TYPES
from ciam.core.exceptions import CiamError, InvalidArgument
from ciam.config.settings import _load_secret_from_file


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="CIAM client helper")
    parser.add_argument("--base-url", default=os.environ.get("CIAM_BASE_URL", DEFAULT_BASE_URL))
    parser.add_argument("--token", default=None,
                        help="Bearer token (default: /run/secrets/ciam_token or CIAM_TOKEN)")

    sub = parser.add_subparsers(dest="cmd")

    sc = sub.add_parser("check", help="Check whether a subject holds permission flags")
    sc.add_argument("--subject-type", required=True, choices=SUBJECT_TYPES)
    sc.add_argument("--id", required=True)
    sc.add_argument("--required", nargs="+", required=True)
    sc.add_argument("--additional", nargs="*", default=[])
    sc.add_argument("--include-missing", action="store_true")

    sub.add_parser("whoami", help="Show the user owning the token")

    gu = sub.add_parser("get-user")
    gu.add_argument("--id", required=True)

    gr = sub.add_parser("get-role")
    gr.add_argument("--id", required=True)

    gp = sub.add_parser("get-permission")
    gp.add_argument("--flag", required=True)

    for name in ("list-users", "list-roles", "list-permissions"):
        sl = sub.add_parser(name)
        sl.add_argument("--skip", type=int, default=0)
        sl.add_argument("--limit", type=int, default=100)

    cp = sub.add_parser("create-permission")
    cp.add_argument("--name", required=True)
    cp.add_argument("--description", required=True)
    cp.add_argument("--flag", required=True)

    return parser


def _dispatch(ciam: Ciam, args: argparse.Namespace):
    if args.cmd == "check":
        return ciam.check_permissions(
            args.subject_type, args.id, args.required, args.additional,
            include_missing=args.include_missing,
        ).map(lambda result: result.raw)
    if args.cmd == "whoami":
        return ciam.users.get_self()
    if args.cmd == "get-user":
        return ciam.get_user(args.id)
    if args.cmd == "get-role":
        return ciam.get_role(args.id)
    if args.cmd == "get-permission":
        return ciam.permissions.get_permission(args.flag)
    if args.cmd == "list-users":
        return ciam.list_users(args.skip, args.limit)
    if args.cmd == "list-roles":
        return ciam.roles.list_roles(args.skip, args.limit)
    if args.cmd == "list-permissions":
        return ciam.permissions.list_permissions(args.skip, args.limit)
    if args.cmd == "create-permission":
        return ciam.create_permission(args.name, args.description, args.flag)
    raise ValueError(f"Unknown command: {args.cmd}")


def main(argv=None) -> None:
    """Command-line entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.cmd:
        parser.print_help()
        return

    token = args.token or _load_secret_from_file("ciam_token", "CIAM_TOKEN")
    if not token:
        parser.error("Missing CIAM token (use --token or set CIAM_TOKEN)")

    ciam = Ciam(token, base_url=args.base_url)
    try:
        result = _dispatch(ciam, args)
    except InvalidArgument as e:
        parser.error(f"{e.field}: {e.message}")
    except (CiamError, requests.RequestException) as e:
        print(f"[{args.cmd}] Error: {e}", file=sys.stderr)
        sys.exit(1)

    if not result:
        print(f"[{args.cmd}] Not found", file=sys.stderr)
        sys.exit(1)

    print(json.dumps(result.value, indent=2, sort_keys=True))


if __name__ == "__main__":
    main()
