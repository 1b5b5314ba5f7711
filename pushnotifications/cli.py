"""
Beams push notifications command line tool.

Publishes test notifications, deletes users and mints auth tokens from a
shell, which helps when debugging device registration:

    push-notifications publish-interests hello --body '{"fcm": {...}}'
    push-notifications publish-users user-0001 --body-file body.json
    push-notifications delete-user user-0001
    push-notifications generate-token user-0001

Credentials come from BEAMS_INSTANCE_ID / BEAMS_SECRET_KEY (or .env),
or from --instance-id / --secret-key.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from pushnotifications.client import PushNotifications
from pushnotifications.core.config import load_settings
from pushnotifications.core.logging_config import setup_logging
from pushnotifications.errors import PushNotificationsError

logger = logging.getLogger(__name__)


# Color codes for CLI output
class Colors:
    GREEN = '\033[92m'
    RED = '\033[91m'
    END = '\033[0m'


def print_success(msg: str):
    print(f"{Colors.GREEN}✓{Colors.END} {msg}")


def print_error(msg: str):
    print(f"{Colors.RED}✗{Colors.END} {msg}", file=sys.stderr)


def load_publish_body(args: argparse.Namespace) -> dict:
    """Read the publish body from --body or --body-file."""
    if args.body_file:
        try:
            raw = Path(args.body_file).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise PushNotificationsError(f"Cannot read publish body file: {e}") from e
    else:
        raw = args.body
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        raise PushNotificationsError(f"Publish body is not valid JSON: {e}") from e


def build_client(args: argparse.Namespace) -> PushNotifications:
    settings = load_settings()
    if args.instance_id:
        settings.BEAMS_INSTANCE_ID = args.instance_id
    if args.secret_key:
        settings.BEAMS_SECRET_KEY = args.secret_key
    if args.base_url:
        settings.BEAMS_BASE_URL = args.base_url
    if args.timeout:
        settings.BEAMS_REQUEST_TIMEOUT_SECONDS = args.timeout
    return PushNotifications.from_settings(settings)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="push-notifications",
        description="Pusher Beams push notifications tool",
    )
    parser.add_argument("--instance-id", help="Beams instance ID (default: BEAMS_INSTANCE_ID)")
    parser.add_argument("--secret-key", help="Beams secret key (default: BEAMS_SECRET_KEY)")
    parser.add_argument("--base-url", help="Override the API base URL")
    parser.add_argument("--timeout", type=float, help="Request timeout in seconds")
    parser.add_argument("--log-level", default=None, help="Log level (default: LOG_LEVEL)")

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    for name, command_help, target_help in (
        ("publish-interests", "Send a notification to interests", "Interest names to publish to"),
        ("publish-users", "Send a notification to users", "User ids to publish to"),
    ):
        publish_parser = subparsers.add_parser(name, help=command_help)
        publish_parser.add_argument("targets", nargs="+", help=target_help)
        body_group = publish_parser.add_mutually_exclusive_group(required=True)
        body_group.add_argument("--body", help="Publish body as a JSON string")
        body_group.add_argument("--body-file", help="Path to a JSON file holding the publish body")

    delete_parser = subparsers.add_parser(
        "delete-user",
        help="Remove all devices of a user"
    )
    delete_parser.add_argument("user_id")

    token_parser = subparsers.add_parser(
        "generate-token",
        help="Print a Beams auth token for a user"
    )
    token_parser.add_argument("user_id")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    try:
        setup_logging(log_level=args.log_level, json_format=False)
        with build_client(args) as beams_client:
            if args.command == "publish-interests":
                publish_id = beams_client.publish_to_interests(args.targets, load_publish_body(args))
                print_success(f"Published to {len(args.targets)} interest(s): {publish_id}")

            elif args.command == "publish-users":
                publish_id = beams_client.publish_to_users(args.targets, load_publish_body(args))
                print_success(f"Published to {len(args.targets)} user(s): {publish_id}")

            elif args.command == "delete-user":
                beams_client.delete_user(args.user_id)
                print_success(f"Deleted user {args.user_id}")

            elif args.command == "generate-token":
                print(json.dumps(beams_client.generate_token(args.user_id)))

    except PushNotificationsError as e:
        print_error(str(e))
        logger.debug("Command failed", exc_info=True)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
