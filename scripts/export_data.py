"""Write the tracker's data to an ``investment_data_<date>.json`` file."""

from __future__ import annotations

import argparse
import asyncio
import datetime as dt
import json
from pathlib import Path

from investment_tracker.config import get_settings
from investment_tracker.db.init import init_database
from investment_tracker.db.session import Database
from investment_tracker.services.transfer import collect_export, export_filename


async def _run(output_dir: Path, database_url: str | None) -> Path:
    settings = get_settings()
    database = Database(database_url or settings.database_url)
    try:
        await init_database(database)
        async with database.session() as session:
            document = await collect_export(session, settings.default_monthly_budget)
    finally:
        await database.dispose()

    output_dir.mkdir(parents=True, exist_ok=True)
    target = output_dir / export_filename(dt.date.today())
    target.write_text(json.dumps(document, indent=2))
    return target


def main() -> None:
    parser = argparse.ArgumentParser(description="Export investment tracker data to JSON")
    parser.add_argument("--output-dir", default="public/data", type=Path)
    parser.add_argument("--database-url", default=None, help="Defaults to DATABASE_URL / settings")
    args = parser.parse_args()
    target = asyncio.run(_run(args.output_dir, args.database_url))
    print(f"Saved export to {target}")


if __name__ == "__main__":
    main()
