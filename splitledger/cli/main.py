from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from pydantic import TypeAdapter, ValidationError

from splitledger.cli.render import render_report, render_splits
from splitledger.config import settings
from splitledger.errors import LedgerError
from splitledger.logging import configure_logging
from splitledger.models import GroupSnapshot, SplitType
from splitledger.services.ledger import BalanceReport, compute_report
from splitledger.services.members import index_members
from splitledger.services.splits import compute_splits

logger = logging.getLogger(__name__)

_report_adapter = TypeAdapter(BalanceReport)


def _parse_weight(raw: str) -> tuple[str, str]:
    member_id, sep, value = raw.partition("=")
    if not sep or not member_id or not value:
        raise argparse.ArgumentTypeError(f"expected MEMBER=VALUE, got {raw!r}")
    return member_id, value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="splitledger", description="Shared-expense balances and settle-up plans.")
    sub = parser.add_subparsers(dest="command", required=True)

    rep = sub.add_parser("report", help="print balances and suggested transfers for a group snapshot")
    rep.add_argument("snapshot", type=Path, help="JSON file with group, members, expenses, splits, settlements")
    rep.add_argument("--json", action="store_true", help="print the report as JSON")

    spl = sub.add_parser("split", help="show how an amount is divided")
    spl.add_argument("--amount", required=True)
    spl.add_argument("--type", dest="split_type", choices=[t.value for t in SplitType], default=SplitType.EQUAL.value)
    spl.add_argument("--participant", dest="participants", action="append", required=True, metavar="MEMBER")
    spl.add_argument("--weight", dest="weights", action="append", type=_parse_weight, metavar="MEMBER=VALUE")
    spl.add_argument("--currency", default=settings.default_currency)
    return parser


def _cmd_report(args: argparse.Namespace) -> int:
    try:
        snapshot = GroupSnapshot.model_validate_json(args.snapshot.read_text(encoding="utf-8"))
    except OSError as e:
        print(f"error: cannot read {args.snapshot}: {e}", file=sys.stderr)
        return 2
    except ValidationError as e:
        print(f"error: invalid snapshot {args.snapshot}:\n{e}", file=sys.stderr)
        return 2

    logger.debug("Loaded snapshot %s for group %s", args.snapshot, snapshot.group.id)
    report = compute_report(snapshot)

    if args.json:
        out = _report_adapter.dump_json(report, indent=2, exclude={"balances": {"__all__": {"member"}}})
        print(out.decode())
        return 0

    text = render_report(
        report,
        index_members(snapshot.members),
        title=snapshot.group.name,
        max_rows=settings.report_max_rows,
    )
    print(text, end="")
    return 0


def _cmd_split(args: argparse.Namespace) -> int:
    weights = dict(args.weights) if args.weights else None
    shares = compute_splits(args.amount, args.split_type, args.participants, weights)
    print(render_splits(shares, args.currency, {}), end="")
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    configure_logging(settings.log_level)
    args = build_parser().parse_args(argv)
    try:
        if args.command == "report":
            return _cmd_report(args)
        return _cmd_split(args)
    except LedgerError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
