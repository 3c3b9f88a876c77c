"""
Command line entry point.

    sui-toolbox publish packages/token
    sui-toolbox fund 0x1234...
    sui-toolbox validators
"""

import argparse
import json
import sys

from .config import ToolboxConfig
from .errors import ToolboxError
from .faucet import fund
from .logger import configure_logging
from .toolbox import get_client, publish_package, setup_sui_client


def cmd_publish(args, config: ToolboxConfig) -> int:
    toolbox = setup_sui_client(config)
    try:
        result = publish_package(args.path, toolbox)
    finally:
        toolbox.close()

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        print(result.package_id)
    return 0


def cmd_fund(args, config: ToolboxConfig) -> int:
    fund(args.address, config.faucet_url, timeout=config.faucet_timeout)
    print(f"[OK] Funded {args.address}")
    return 0


def cmd_validators(args, config: ToolboxConfig) -> int:
    with get_client(config) as client:
        validators = client.get_latest_sui_system_state()["activeValidators"]
    for validator in validators:
        print(f"{validator.get('suiAddress')}  {validator.get('name', '')}")
    print(f"{len(validators)} active validators")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sui-toolbox",
        description="Provision funded test accounts and publish Move packages",
    )
    parser.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING, ERROR")
    sub = parser.add_subparsers(dest="command", required=True)

    publish = sub.add_parser("publish", help="Build and publish a Move package from a fresh account")
    publish.add_argument("path", help="Move package directory")
    publish.add_argument("--json", action="store_true", help="Print the full result as JSON")
    publish.set_defaults(func=cmd_publish)

    fund_parser = sub.add_parser("fund", help="Request test SUI for an address")
    fund_parser.add_argument("address")
    fund_parser.set_defaults(func=cmd_fund)

    validators = sub.add_parser("validators", help="List active validators")
    validators.set_defaults(func=cmd_validators)

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    config = ToolboxConfig.from_env()
    is_valid, errors = config.validate()
    if not is_valid:
        for error in errors:
            print(f"[FAIL] {error}", file=sys.stderr)
        return 2

    try:
        return args.func(args, config)
    except ToolboxError as e:
        print(f"[FAIL] {type(e).__name__}: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
