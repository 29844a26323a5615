"""
Fixture export script for the PetStore seeder.

Writes the fixture set as MongoDB Extended JSON, one file per collection and
one document per line, so it can be loaded with `mongoimport` or inspected
without a running database.
"""

from __future__ import annotations

import sys
from datetime import datetime
from pathlib import Path
from typing import Dict, Optional

import typer
from bson import json_util

from petstore_seed.config import get_settings
from petstore_seed.domain.fixtures import FixtureSet, build_fixture_set
from petstore_seed.domain.models import thaw

app = typer.Typer(help="Export the PetStore fixtures as Extended JSON lines.")

JSON_OPTIONS = json_util.RELAXED_JSON_OPTIONS


def _write_collection(path: Path, documents) -> int:
    written = 0
    with path.open("w", encoding="utf-8") as f:
        for document in documents:
            f.write(json_util.dumps(thaw(document), json_options=JSON_OPTIONS))
            f.write("\n")
            written += 1
    return written


def _export(fixture_set: FixtureSet, output_dir: Path) -> Dict[str, int]:
    output_dir.mkdir(parents=True, exist_ok=True)
    return {
        name: _write_collection(output_dir / f"{name}.jsonl", documents)
        for name, documents in fixture_set.items()
    }


@app.command()
def main(
    output: Path = typer.Option(
        Path("fixtures"),
        "--output",
        "-o",
        help="Directory to write <collection>.jsonl files into.",
    ),
    ship_date: Optional[datetime] = typer.Option(
        None,
        "--ship-date",
        help="Fixed shipDate for orders (default: now, UTC).",
    ),
) -> None:
    """
    Export the fixture set using the configured collection names.
    """
    names = get_settings().collection_names()
    fixture_set = build_fixture_set(ship_date=ship_date, collection_names=names)
    written = _export(fixture_set, output)
    for name, count in written.items():
        typer.echo(f"Wrote {count} documents -> {output / f'{name}.jsonl'}")


if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)
