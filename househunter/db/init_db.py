from sqlalchemy import text
from sqlalchemy.engine import Engine

from househunter.core.logger import logger
from househunter.db.base import Base
from househunter import models  # noqa: F401  registers tables on Base


def init_db(engine: Engine) -> None:
    """
    Fail fast when the database is unreachable, then create missing tables.
    Errors propagate so the lifespan aborts startup.
    """
    logger.info(f"DB INIT STARTED | url={engine.url.render_as_string(hide_password=True)}")

    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))

    Base.metadata.create_all(bind=engine)
    logger.info("DB TABLES CREATED")
