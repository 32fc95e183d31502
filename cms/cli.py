"""
CMS Command Line

Commands:
  serve        - Run the HTTP server (default)
  create-user  - Create an editor account (seeding)
  init-config  - Write ~/.cms/config.yaml with defaults
"""

import argparse
import sys
from typing import Optional

from cms.configs import create_default_config, get_logger, setup_logging
from cms.exceptions import CmsError
from cms.storage.database import ROLE_ADMIN, ROLE_EDITOR


def _serve(args: argparse.Namespace) -> int:
    from cms.configs.services import get_config
    from cms.http import run_server

    port = args.port or int(get_config()["http_port"])
    run_server(host=args.host, port=port)
    return 0


def _create_user(args: argparse.Namespace) -> int:
    from cms.configs.services import get_database
    from cms.security import hash_password

    logger = get_logger("cli")
    try:
        user = get_database().create_user(
            args.email,
            args.username,
            hash_password(args.password),
            role=args.role,
        )
    except CmsError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1
    logger.info(f"Created {user['role']} {user['email']}")
    print(f"Created {user['role']} user: {user['email']}")
    return 0


def _init_config(args: argparse.Namespace) -> int:
    print(f"Config: {create_default_config()}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="cms", description="Content backend")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.set_defaults(func=_serve, host="0.0.0.0", port=None)
    subparsers = parser.add_subparsers(dest="command")

    serve = subparsers.add_parser("serve", help="Run the HTTP server")
    serve.add_argument("--host", default="0.0.0.0")
    serve.add_argument("--port", type=int, default=None)
    serve.set_defaults(func=_serve)

    create_user = subparsers.add_parser("create-user", help="Create an editor account")
    create_user.add_argument("--email", required=True)
    create_user.add_argument("--username", required=True)
    create_user.add_argument("--password", required=True)
    create_user.add_argument("--role", choices=[ROLE_ADMIN, ROLE_EDITOR], default=ROLE_ADMIN)
    create_user.set_defaults(func=_create_user)

    init_config = subparsers.add_parser("init-config", help="Write default config.yaml")
    init_config.set_defaults(func=_init_config)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    # Initialize logging (must be called before get_logger)
    setup_logging(debug=True if args.debug else None)
    return args.func(args)
