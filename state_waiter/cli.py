"""
Command-line entry point: block until an EC2 resource reaches a target state.

Example:
    state-waiter --kind ami --id ami-0123 --target available --pending pending
"""

from __future__ import annotations

import argparse
import logging
import signal
import sys

from botocore.exceptions import BotoCoreError, ClientError

from .cancellation import CancellationToken, install_sigint_handler
from .common.aws_client_factory import create_ec2_client
from .errors import StateWaitError, WaitInterruptedError
from .probes import PROBES_BY_KIND
from .state_change import StateChangeConf, wait_for_state
from .wait_policy import WaitSettings

EXIT_OK = 0
EXIT_WAIT_FAILED = 1
EXIT_AWS_ERROR = 2
EXIT_INTERRUPTED = 130


def parse_args(argv: list[str]) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Wait for an EC2 resource to reach a target state.",
    )
    parser.add_argument(
        "--kind", required=True, choices=sorted(PROBES_BY_KIND), help="Resource kind."
    )
    parser.add_argument("--id", required=True, dest="resource_id", help="Resource ID to watch.")
    parser.add_argument("--target", required=True, help="State that ends the wait successfully.")
    parser.add_argument(
        "--pending",
        nargs="*",
        default=[],
        metavar="STATE",
        help="States that are valid steps on the way to the target.",
    )
    parser.add_argument("--region", required=True, help="AWS region of the resource.")
    parser.add_argument("--env-file", help="Optional .env file with credentials and overrides.")
    parser.add_argument("--verbose", action="store_true", help="Log every poll.")
    return parser.parse_args(argv)


def run_wait(args: argparse.Namespace, cancel_token: CancellationToken):
    """Build the probe for `args` and wait for its target state."""
    policy = WaitSettings.from_env(args.env_file).policy()
    ec2_client = create_ec2_client(args.region, env_path=args.env_file)
    probe = PROBES_BY_KIND[args.kind](ec2_client, args.resource_id)
    conf = StateChangeConf(
        target=args.target,
        probe=probe,
        pending=frozenset(args.pending),
        cancel_token=cancel_token,
    )
    return wait_for_state(conf, policy)


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the state-waiter CLI."""
    args = parse_args(sys.argv[1:] if argv is None else argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(message)s",
    )

    cancel_token = CancellationToken()
    previous_handler = install_sigint_handler(cancel_token)
    try:
        run_wait(args, cancel_token)
    except WaitInterruptedError:
        logging.error("Wait for %s %s interrupted", args.kind, args.resource_id)
        return EXIT_INTERRUPTED
    except StateWaitError as exc:
        logging.error("Wait for %s %s failed: %s", args.kind, args.resource_id, exc)
        return EXIT_WAIT_FAILED
    except (ClientError, BotoCoreError, ValueError) as exc:
        logging.error("AWS error while waiting for %s: %s", args.resource_id, exc)
        return EXIT_AWS_ERROR
    finally:
        signal.signal(signal.SIGINT, previous_handler)

    print(f"✅ {args.kind} {args.resource_id} reached state '{args.target}'")
    return EXIT_OK


if __name__ == "__main__":  # pragma: no cover - script entry point
    sys.exit(main())
