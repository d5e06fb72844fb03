# operational entry points: python -m chooser.manage <command>
import argparse
import asyncio
import sys

import httpx

from .client import ChooserAPIError, ChooserClient
from .config import CHOOSER_API_URL, CHOOSER_DB_V1, PORT
from .db import Database
from .v1 import init_db
from .v1.retention import run_sweep


def cmd_init_db(args) -> int:
    database = Database(args.db)
    init_db(database)
    print(f"Initialized {database.url}")
    return 0


def cmd_sweep(args) -> int:
    database = Database(args.db)
    counts = run_sweep(database)
    print(f"Removed {counts['unpublished']} unpublished, {counts['idle']} idle")
    return 0


async def _check(url: str) -> bool:
    async with ChooserClient(url) as client:
        data = await client.health()
    return data.get("status") == "ok"


def cmd_check(args) -> int:
    try:
        ok = asyncio.run(_check(args.url))
    except (ChooserAPIError, httpx.HTTPError) as e:
        print(f"Health check failed: {e}", file=sys.stderr)
        return 1
    print("ok" if ok else "unhealthy")
    return 0 if ok else 1


def cmd_serve(args) -> int:
    import uvicorn
    uvicorn.run("chooser.main:app", host=args.host, port=args.port, log_level="info")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="chooser")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("init-db", help="create tables and seed templates")
    p.add_argument("--db", default=CHOOSER_DB_V1)
    p.set_defaults(func=cmd_init_db)

    p = sub.add_parser("sweep", help="delete stale choosers once (cron entry point)")
    p.add_argument("--db", default=CHOOSER_DB_V1)
    p.set_defaults(func=cmd_sweep)

    p = sub.add_parser("check", help="probe a deployed API's health endpoint")
    p.add_argument("--url", default=CHOOSER_API_URL)
    p.set_defaults(func=cmd_check)

    p = sub.add_parser("serve", help="run the API with uvicorn")
    p.add_argument("--host", default="0.0.0.0")
    p.add_argument("--port", type=int, default=PORT)
    p.set_defaults(func=cmd_serve)

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
