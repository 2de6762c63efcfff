from __future__ import annotations

import logging
import sys

from sqlalchemy.exc import SQLAlchemyError

from taskboard.config import ConfigError, Settings, load_settings
from taskboard.infra.db import create_db_engine, create_session_factory, init_db
from taskboard.infra.logging import setup_logging
from taskboard.infra.sql_store import SqlRemoteStore
from taskboard.services.board_service import BoardService

logger = logging.getLogger(__name__)


def build_service(settings: Settings) -> BoardService:
    engine = create_db_engine(settings.database_url)
    init_db(engine)
    return BoardService(SqlRemoteStore(create_session_factory(engine)))


def main() -> int:
    try:
        settings = load_settings()
    except ConfigError as exc:
        print(exc, file=sys.stderr)
        return 2

    setup_logging(settings)
    try:
        service = build_service(settings)
    except SQLAlchemyError as exc:
        logger.error("Database unreachable: %s", exc)
        return 1

    if not service.load():
        return 1
    for column in service.snapshot():
        logger.info("%s: %d task(s)", column.title, len(column.tasks))
    return 0


if __name__ == "__main__":
    sys.exit(main())
