from __future__ import annotations

import argparse
import json
import random
import sys
from typing import Any, Dict

from nightduty.io.csv_loader import load_personal_requests, load_staff
from nightduty.io.excel_export import export_night_schedule_to_excel
from nightduty.models.rules import RuleSet
from nightduty.solver.engine import generate_night_schedule
from nightduty.utils.logging_setup import setup_logging
from nightduty.utils.structured_logging import configure_structlog


def _build_rules(args: argparse.Namespace) -> RuleSet:
    overrides: Dict[str, Any] = {"arrangement_mode": args.mode}
    if args.male_days is not None:
        overrides["male_days"] = int(args.male_days)
    if args.female_days is not None:
        overrides["female_days"] = int(args.female_days)
    if args.min_interval is not None:
        overrides["min_interval_days"] = int(args.min_interval)
    if args.no_reduction:
        overrides["reduction_enabled"] = False
    return RuleSet.from_dict(overrides)


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="大夜排班 (night duty scheduler)")
    p.add_argument("--roster", required=True, help="Roster CSV (staff_id, name, gender, ...)")
    p.add_argument("--start", required=True, help="First day, YYYY-MM-DD")
    p.add_argument("--end", required=True, help="Last day, YYYY-MM-DD")
    p.add_argument("--requests", help="Leave CSV with staff_id and date columns")
    p.add_argument("--rest-day", dest="rest_days", action="append", default=[],
                   help="Rest day, YYYY-MM-DD (repeatable)")
    p.add_argument("--mode", choices=["continuous", "distributed"], default="continuous")
    p.add_argument("--male-days", type=int, help="Base nights for group A (default: 4)")
    p.add_argument("--female-days", type=int, help="Base nights for group B (default: 3)")
    p.add_argument("--min-interval", type=int, help="Minimum spacing in distributed mode (default: 7)")
    p.add_argument("--no-reduction", action="store_true", help="Disable random quota reduction")
    p.add_argument("--seed", type=int, help="Seed for quota reduction")
    p.add_argument("--excel", help="Write an xlsx export to this path")
    p.add_argument("-v", "--verbose", action="count", default=0)
    p.add_argument("--json", dest="json_out", action="store_true", help="Print the output contract as JSON")
    args = p.parse_args(argv)

    # stdout carries only the schedule
    setup_logging(level="DEBUG" if args.verbose else "WARNING", log_file=None, stream=sys.stderr)
    configure_structlog(json_output=args.json_out, stream=sys.stderr)

    staff = load_staff(args.roster)
    requests = load_personal_requests(args.requests) if args.requests else {}
    rest_days = {d: True for d in args.rest_days}
    rng = random.Random(args.seed) if args.seed is not None else None

    res = generate_night_schedule(
        staff,
        {"startDate": args.start, "endDate": args.end},
        personal_requests=requests,
        rest_days=rest_days,
        rules=_build_rules(args),
        rng=rng,
    )

    if args.excel:
        export_night_schedule_to_excel(res, staff, args.excel)

    if args.json_out:
        print(json.dumps(res.to_dict(), ensure_ascii=False, indent=2))
    else:
        print("概要:")
        for k, v in res.summary().items():
            print(f" - {k}: {v}")
        for s in staff:
            if s.staff_id in res.schedule:
                print(f"   {s.display_name}: {', '.join(res.night_dates(s.staff_id)) or '-'}")
        for msg in res.stats.errors:
            print(f" ! {msg}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
