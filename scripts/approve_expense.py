#!/usr/bin/env python3
"""
Run one expense claim through an approval chain.

Usage:
    python scripts/approve_expense.py --requester "Ana Costa" --amount 15000.00 \\
        --purpose "Datacenter server" --department IT [--config chain.yaml]

The script:
  1. Builds the chain (built-in standard chain, or --config YAML)
  2. Processes the request, logging JSON lines to stderr
  3. Prints the outcome as JSON on stdout

Exit status: 0 approved, 1 rejected, 2 invalid request or configuration.
"""

import argparse
import json
import sys
from pathlib import Path

import yaml

# Add project root to path
ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))

from approval_config import get_chain
from approval_engines.workflow import process
from approval_kernel.domain.request import ExpenseRequest
from approval_kernel.exceptions import ApprovalChainError
from approval_kernel.logging_config import configure_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Decide an expense claim.")
    parser.add_argument("--requester", required=True)
    parser.add_argument("--amount", required=True, help="Decimal amount, e.g. 350.00")
    parser.add_argument("--purpose", required=True)
    parser.add_argument("--department", required=True)
    parser.add_argument("--config", type=Path, default=None, help="Chain definition YAML")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(level=args.log_level)

    try:
        head = get_chain(args.config)
        request = ExpenseRequest(
            requester=args.requester,
            amount=args.amount,
            purpose=args.purpose,
            department=args.department,
        )
    except (ApprovalChainError, FileNotFoundError, KeyError, ValueError, yaml.YAMLError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2

    outcome = process(head, request)
    print(json.dumps(outcome.to_dict(), indent=2))
    return 0 if outcome.is_approved else 1


if __name__ == "__main__":
    sys.exit(main())
