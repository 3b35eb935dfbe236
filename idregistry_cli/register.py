"""
`idregistry register` command.

Builds a registerFor relay request from command-line arguments and
either prints it (--dry-run) or submits it to the relay.
"""
import argparse
import json
import logging
import sys
from typing import List, Optional

from idregistry_sdk import RegistryClient, RelayConfig, get_dispatcher
from idregistry_sdk.config import DEFAULT_NETWORK
from idregistry_sdk.exceptions import ConfigurationError, ValidationError, DispatchError
from idregistry_sdk.payload import canonical_signature, function_selector

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_DISPATCH_ERROR = 1
EXIT_USAGE_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="idregistry",
        description="Relay IdRegistry registrations through Syndicate",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    register = subparsers.add_parser("register", help="Submit a registerFor call")
    register.add_argument("--to", required=True, help="Address receiving the id")
    register.add_argument("--recovery", required=True, help="Recovery address")
    register.add_argument("--deadline", required=True, type=int, help="Signature deadline")
    register.add_argument("--sig", required=True, help="Hex signature authorizing the registration")
    register.add_argument("--network", default=DEFAULT_NETWORK, help=f"Network name (default: {DEFAULT_NETWORK})")
    register.add_argument("--contract-address", help="Override the IdRegistry address")
    register.add_argument("--dry-run", action="store_true", help="Print the request instead of sending it")
    register.add_argument("--no-validate", action="store_true", help="Skip address and signature checks")
    register.add_argument("--stub", action="store_true", help="Use the offline stub dispatcher")
    register.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def run_register(args: argparse.Namespace) -> int:
    try:
        config = RelayConfig.from_env()
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return EXIT_USAGE_ERROR

    dispatcher = get_dispatcher(config, use_stub=args.stub or args.dry_run)
    with RegistryClient(
        config,
        dispatcher=dispatcher,
        network=args.network,
        contract_address=args.contract_address,
        validate=not args.no_validate,
    ) as client:
        try:
            request = client.build_request(args.to, args.recovery, args.deadline, args.sig)
        except (ValidationError, ValueError) as e:
            print(f"Invalid arguments: {e}", file=sys.stderr)
            return EXIT_USAGE_ERROR

        if args.dry_run:
            output = {
                "request": request.to_wire(),
                "canonicalSignature": canonical_signature(request.function_signature),
                "selector": function_selector(request.function_signature),
            }
            print(json.dumps(output, indent=2))
            return EXIT_OK

        try:
            handle = client.send_request(request)
        except DispatchError as e:
            print(f"Dispatch failed: {e}", file=sys.stderr)
            return EXIT_DISPATCH_ERROR

    print(json.dumps(handle.model_dump(by_alias=True, exclude_none=True), indent=2))
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    if args.command == "register":
        return run_register(args)
    return EXIT_USAGE_ERROR


if __name__ == "__main__":
    sys.exit(main())
