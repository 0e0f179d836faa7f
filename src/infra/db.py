from sqlalchemy import create_engine
from src.infra.settings import settings

DATABASE_URL = settings.DATABASE_URL
engine = create_engine(DATABASE_URL, pool_pre_ping=True, future=True)

def init_db() -> None:
    """Create tables if they do not exist yet."""
    with engine.begin() as conn:
        # generic logs
        conn.exec_driver_sql("""
        CREATE TABLE IF NOT EXISTS logs (
          id      INTEGER PRIMARY KEY AUTOINCREMENT,
          ts      TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP,
          level   VARCHAR(10) NOT NULL,
          msg     TEXT NOT NULL
        );
        """)

        # committed customizations, as priced
        conn.exec_driver_sql("""
        CREATE TABLE IF NOT EXISTS customization_records (
          id           INTEGER PRIMARY KEY AUTOINCREMENT,
          ts           TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP,
          pizza        TEXT NOT NULL,
          size         TEXT NOT NULL,
          half_and_half BOOLEAN NOT NULL DEFAULT 0,
          price        REAL NOT NULL,
          payload_json TEXT NOT NULL
        );
        """)
        conn.exec_driver_sql("""
        CREATE INDEX IF NOT EXISTS idx_customization_records_ts
          ON customization_records (ts DESC);
        """)
