"""Module executed when running ``python -m mylist``."""

from __future__ import annotations

import argparse
import asyncio
import logging

import uvicorn

from app.config import settings
from app.database import Database
from app.main import build_record_store
from app.seed import seed_catalog


async def _seed(force: bool) -> bool:
    database: Database | None = None
    if settings.storage_backend == "database":
        database = Database(settings.database_url)
        await database.create_all()
    try:
        store = build_record_store(settings, database)
        return await seed_catalog(store, force=force)
    finally:
        if database is not None:
            await database.dispose()


def main(argv: list[str] | None = None) -> None:
    """Start the uvicorn server, or seed the catalog with ``seed``."""

    parser = argparse.ArgumentParser(prog="mylist")
    subcommands = parser.add_subparsers(dest="command")
    subcommands.add_parser("serve", help="run the HTTP server (default)")
    seed_parser = subcommands.add_parser("seed", help="write the built-in catalog")
    seed_parser.add_argument(
        "--force", action="store_true", help="overwrite an existing catalog"
    )
    args = parser.parse_args(argv)

    if args.command == "seed":
        logging.basicConfig(level=settings.log_level)
        asyncio.run(_seed(args.force))
        return

    uvicorn.run(
        "app.main:app",
        host=settings.server_host,
        port=settings.server_port,
        reload=settings.environment == "development",
    )


if __name__ == "__main__":  # pragma: no cover - runtime entrypoint
    main()
