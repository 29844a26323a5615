"""
MongoDB connection factory for the PetStore seeder.

Builds `MongoClient` instances from settings, checks reachability with a
`ping` (retried with exponential backoff via tenacity for transient failures),
and scopes the client's lifetime to a `with` block so it is closed on exit
whether the run succeeds or not.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Generator, Optional

from pymongo import MongoClient
from pymongo.database import Database
from pymongo.errors import AutoReconnect, ConnectionFailure
from tenacity import (
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from petstore_seed.config import Settings, get_settings
from petstore_seed.errors import translate_errors
from petstore_seed.utils.logging import get_logger

log = get_logger(__name__)


def build_client(url: str, timeout_ms: int) -> MongoClient:
    """
    Create a client without contacting the server (pymongo connects lazily).
    """
    return MongoClient(
        url,
        serverSelectionTimeoutMS=timeout_ms,
        connectTimeoutMS=timeout_ms,
        tz_aware=True,
    )


def ping(client: MongoClient, attempts: int = 3) -> None:
    """
    Verify the server is reachable, retrying transient connection failures.

    Raises
    ------
    pymongo.errors.ConnectionFailure
        If the server is still unreachable after all attempts.
    """
    retrying = Retrying(
        stop=stop_after_attempt(max(attempts, 1)),
        wait=wait_exponential(multiplier=1, min=1, max=10),
        retry=retry_if_exception_type((ConnectionFailure, AutoReconnect)),
        before_sleep=lambda state: log.warning(
            "MongoDB not reachable, retrying",
            extra={"attempt": state.attempt_number},
        ),
        reraise=True,
    )
    retrying(client.admin.command, "ping")


@contextmanager
def mongo_client(
    url: Optional[str] = None,
    settings: Optional[Settings] = None,
) -> Generator[MongoClient, None, None]:
    """
    Context manager yielding a connected client; always closes it on exit.

    Connection failures surface as `DatabaseConnectionError`.

    Example
    -------
        with mongo_client() as client:
            database = get_database(client, "petstore_test")
    """
    settings = settings or get_settings()
    target = url or settings.mongodb_url
    with translate_errors("connect"):
        client = build_client(target, settings.mongodb_timeout_ms)
    try:
        with translate_errors("connect"):
            ping(client, attempts=settings.mongodb_connect_retries)
        log.info("MongoDB connection established")
        yield client
    finally:
        client.close()
        log.debug("MongoDB client closed")


def get_database(client: MongoClient, name: str) -> Database:
    """Select the database by name; it is created on first write."""
    return client[name]


__all__ = ["build_client", "get_database", "mongo_client", "ping"]
