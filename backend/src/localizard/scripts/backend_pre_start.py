"""Block until the translation store accepts connections.

Run before `alembic upgrade head` in the container entrypoint so migrations
and the API never start against a database that is still booting.
"""

from sqlalchemy import Engine, text
from sqlmodel import Session
from tenacity import RetryCallState, retry, stop_after_delay, wait_fixed

from localizard.core.db import engine
from localizard.core.logging import get_logger, setup_logging

logger = get_logger(__name__)

MAX_WAIT_SECONDS = 60 * 5
RETRY_INTERVAL_SECONDS = 1


def _log_retry(retry_state: RetryCallState) -> None:
    error = retry_state.outcome.exception() if retry_state.outcome else None
    logger.warning(
        "store_not_ready",
        attempt=retry_state.attempt_number,
        error_type=type(error).__name__ if error else None,
    )


@retry(
    stop=stop_after_delay(MAX_WAIT_SECONDS),
    wait=wait_fixed(RETRY_INTERVAL_SECONDS),
    before_sleep=_log_retry,
    reraise=True,
)
def wait_for_store(db_engine: Engine) -> None:
    # Retries only log the error type. Driver messages can carry the connection URI.
    with Session(db_engine) as session:
        session.execute(text("SELECT 1"))


def main() -> None:
    setup_logging()
    logger.info("store_wait_started", max_wait_seconds=MAX_WAIT_SECONDS)
    wait_for_store(engine)
    logger.info("store_ready")


if __name__ == "__main__":
    main()
