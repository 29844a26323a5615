from __future__ import annotations

import sys
from typing import NoReturn, Optional

import typer

from petstore_seed.config import get_settings
from petstore_seed.domain.fixtures import build_fixture_set, build_index_specs
from petstore_seed.errors import DataAccessError
from petstore_seed.infrastructure.db_factory import get_database, mongo_client
from petstore_seed.queries import clear_collections, count_documents, index_names
from petstore_seed.reporter import format_summary, print_status
from petstore_seed.seeder import run_seed
from petstore_seed.utils.logging import configure_logging, get_logger

app = typer.Typer(help="PetStore MongoDB seeder CLI.")
log = get_logger(__name__)

URL_OPTION = typer.Option(None, "--url", "-u", help="MongoDB URL (default from settings).")
DATABASE_OPTION = typer.Option(
    None, "--database", "-d", help="Target database name (default from settings)."
)


def _fail(exc: DataAccessError) -> NoReturn:
    log.error(f"[FAILED] {exc}", extra={"step": exc.step, "collection": exc.collection})
    typer.echo(f"Error: {exc}", err=True)
    raise typer.Exit(code=1)


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    names = settings.collection_names()
    typer.echo(
        f"URL={settings.mongodb_url} | database={settings.mongodb_database} | "
        f"collections={', '.join(names.values())} | timeout_ms={settings.mongodb_timeout_ms}"
    )


@app.command()
def seed(
    url: Optional[str] = URL_OPTION,
    database: Optional[str] = DATABASE_OPTION,
    reset: bool = typer.Option(
        False,
        "--reset",
        help="Drop the fixture collections before seeding.",
    ),
) -> None:
    """
    Create the collections, insert the sample documents, create indexes and
    print a summary.
    """
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)
    names = settings.collection_names()
    database_name = database or settings.mongodb_database

    try:
        with mongo_client(url, settings=settings) as client:
            summary = run_seed(
                get_database(client, database_name),
                build_fixture_set(collection_names=names),
                build_index_specs(names),
                reset=reset,
                collection_names=names,
            )
    except DataAccessError as exc:
        _fail(exc)

    for line in format_summary(summary):
        typer.echo(line)


@app.command()
def status(
    url: Optional[str] = URL_OPTION,
    database: Optional[str] = DATABASE_OPTION,
) -> None:
    """
    Show document counts and indexes of the fixture collections.
    """
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)
    database_name = database or settings.mongodb_database

    try:
        with mongo_client(url, settings=settings) as client:
            db = get_database(client, database_name)
            collections = list(settings.collection_names().values())
            counts = {name: count_documents(db, name) for name in collections}
            indexes = {name: index_names(db, name) for name in collections}
    except DataAccessError as exc:
        _fail(exc)

    print_status(database_name, counts, indexes)


@app.command()
def clear(
    url: Optional[str] = URL_OPTION,
    database: Optional[str] = DATABASE_OPTION,
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation."),
) -> None:
    """
    Delete all documents from the fixture collections (collections and
    indexes are kept).
    """
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)
    database_name = database or settings.mongodb_database
    collections = list(settings.collection_names().values())

    if not yes:
        typer.confirm(
            f"Delete all documents from {', '.join(collections)} in '{database_name}'?",
            abort=True,
        )

    try:
        with mongo_client(url, settings=settings) as client:
            deleted = clear_collections(get_database(client, database_name), collections)
    except DataAccessError as exc:
        _fail(exc)

    for name, count in deleted.items():
        typer.echo(f"Cleared {name}: {count} documents deleted")


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
