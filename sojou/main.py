"""
main.py
--------
Command-line entry point (installed as ``sojou``).

Usage:
    sojou build    --catalog data/activities.paris.json --select louvre,orsay --days 3
    sojou validate --catalog data/activities.paris.json
    sojou replay   trip_1a2b3c4d5e6f --catalog data/activities.paris.json
    sojou serve

Commands:
    build     Build an itinerary from catalog ids and print it as JSON
    validate  Check every catalog record; exit 1 if any record is invalid
    replay    Rebuild a logged trip session and verify its state hash
    serve     Run the HTTP API with uvicorn
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Optional, Sequence

from sojou import config
from sojou.modules.planning import build_itinerary
from sojou.modules.tool_usage.activity_catalog import ActivityCatalog, CatalogError, read_records
from sojou.modules.validation import validate_activity


def _cmd_build(args: argparse.Namespace) -> int:
    catalog = ActivityCatalog.load(args.catalog)
    wanted = [s.strip() for s in args.select.split(",") if s.strip()] if args.select else catalog.ids()
    missing = [i for i in wanted if i not in catalog]
    if missing:
        print(f"Unknown activity id(s): {', '.join(missing)}", file=sys.stderr)
        return 2
    selected = [catalog.get(i) for i in wanted]
    result = build_itinerary(selected, args.days)
    print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    return 0


def _cmd_validate(args: argparse.Namespace) -> int:
    path = args.catalog or config.CATALOG_PATH
    try:
        with open(path, "r", encoding="utf-8") as fh:
            records = read_records(json.load(fh), source=path)
    except (OSError, json.JSONDecodeError) as exc:
        raise CatalogError(f"ERROR_BAD_CATALOG: cannot read {path}: {exc}") from exc

    bad = 0
    seen: set[str] = set()
    for i, record in enumerate(records):
        if not isinstance(record, dict):
            print(f"  ✗  #{i}: not an object")
            bad += 1
            continue
        errors = validate_activity(record).errors
        rid = record.get("id")
        if isinstance(rid, str):
            if rid in seen:
                errors.append(f"duplicate id {rid!r}")
            seen.add(rid)
        if errors:
            bad += 1
            print(f"  ✗  #{i} id={rid!r}")
            for e in errors:
                print(f"       - {e}")
    print(f"\n  {len(records) - bad}/{len(records)} record(s) valid.")
    return 1 if bad else 0


def _cmd_replay(args: argparse.Namespace) -> int:
    from sojou.modules.observability.replay import replay_session

    catalog = ActivityCatalog.load(args.catalog)
    session = replay_session(args.session_id, catalog, logs_dir=args.logs_dir)
    print(json.dumps(session.snapshot(), indent=2, ensure_ascii=False))
    return 0


def _cmd_serve(args: argparse.Namespace) -> int:
    import uvicorn

    uvicorn.run("sojou.api.server:app", host=args.host, port=args.port, reload=args.reload)
    return 0


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="sojou",
        description="Sojou trip planner: itinerary builder, catalog tools, API server",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    p.add_argument("--log-level", default=config.LOG_LEVEL, help="Python logging level (default: %(default)s)")
    sub = p.add_subparsers(dest="command", required=True)

    b = sub.add_parser("build", help="Build an itinerary and print JSON")
    b.add_argument("--catalog", default=None, help="Catalog JSON path (default: SOJOU_CATALOG_PATH)")
    b.add_argument("--select", default="", help="Comma-separated activity ids (default: whole catalog)")
    b.add_argument("--days", type=int, default=config.DEFAULT_DAYS_COUNT, help="Number of days")
    b.set_defaults(func=_cmd_build)

    v = sub.add_parser("validate", help="Validate a catalog file")
    v.add_argument("--catalog", default=None, help="Catalog JSON path (default: SOJOU_CATALOG_PATH)")
    v.set_defaults(func=_cmd_validate)

    r = sub.add_parser("replay", help="Replay a logged trip session")
    r.add_argument("session_id")
    r.add_argument("--catalog", default=None, help="Catalog JSON path (default: SOJOU_CATALOG_PATH)")
    r.add_argument("--logs-dir", dest="logs_dir", default=None, help="Log directory (default: SOJOU_LOGS_DIR)")
    r.set_defaults(func=_cmd_replay)

    s = sub.add_parser("serve", help="Run the HTTP API")
    s.add_argument("--host", default=config.API_HOST)
    s.add_argument("--port", type=int, default=config.API_PORT)
    s.add_argument("--reload", action="store_true")
    s.set_defaults(func=_cmd_serve)

    return p.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")
    try:
        return args.func(args)
    except (CatalogError, FileNotFoundError) as exc:
        print(str(exc), file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
