"""
Backend Pre-start
Blocks until the configured database accepts connections

Run before migrations and the API process:
    cost-report-prestart
"""

import asyncio

from loguru import logger
from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine
from tenacity import AsyncRetrying, RetryCallState, stop_after_attempt, wait_fixed

from cost_report.core.config import settings
from cost_report.core.database import engine
from cost_report.core.logging import setup_logging


def database_label(url: str) -> str:
    """DSN with the password masked, for logs"""
    return make_url(url).render_as_string(hide_password=True)


def _log_retry(retry_state: RetryCallState) -> None:
    error = retry_state.outcome.exception() if retry_state.outcome else None
    logger.warning(
        f"Database not ready (attempt {retry_state.attempt_number}): {error}",
        attempt=retry_state.attempt_number,
    )


async def ping_database(db_engine: AsyncEngine) -> None:
    async with db_engine.connect() as conn:
        await conn.execute(text("SELECT 1"))


async def wait_for_database(
    db_engine: AsyncEngine,
    max_tries: int | None = None,
    wait_seconds: float | None = None,
) -> int:
    """
    Retry `SELECT 1` until it succeeds and return the number of attempts.

    Once `max_tries` is exhausted the last connection error is re-raised.
    """
    retrying = AsyncRetrying(
        stop=stop_after_attempt(max_tries or settings.DB_WAIT_MAX_TRIES),
        wait=wait_fixed(settings.DB_WAIT_SECONDS if wait_seconds is None else wait_seconds),
        before_sleep=_log_retry,
        reraise=True,
    )
    async for attempt in retrying:
        with attempt:
            await ping_database(db_engine)
    return attempt.retry_state.attempt_number


async def prestart() -> int:
    try:
        return await wait_for_database(engine)
    finally:
        await engine.dispose()


def main() -> None:
    setup_logging()
    logger.info(f"Waiting for database at {database_label(settings.DATABASE_URL)}")
    attempts = asyncio.run(prestart())
    logger.info(f"Database ready after {attempts} attempt(s)")


if __name__ == "__main__":
    main()
