"""Application store using SQLAlchemy Core."""

from __future__ import annotations

from typing import Optional

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from .models import DevelopmentApplication

COLUMNS = (
    "council_reference",
    "address",
    "description",
    "info_url",
    "comment_url",
    "date_scraped",
    "date_received",
    "on_notice_from",
    "on_notice_to",
)


class ApplicationDatabase:
    def __init__(self, dsn: str):
        self.engine: Engine = create_engine(dsn, future=True, pool_pre_ping=True)
        self.Session = sessionmaker(self.engine, expire_on_commit=False, future=True)

    def dispose(self) -> None:
        self.engine.dispose()

    def ensure_schema(self) -> None:
        with self.engine.begin() as conn:
            conn.execute(
                text(
                    """
                    CREATE TABLE IF NOT EXISTS data (
                        council_reference TEXT PRIMARY KEY,
                        address TEXT,
                        description TEXT,
                        info_url TEXT,
                        comment_url TEXT,
                        date_scraped TEXT,
                        date_received TEXT,
                        on_notice_from TEXT,
                        on_notice_to TEXT
                    )
                    """
                )
            )

    def insert_application(self, application: DevelopmentApplication) -> bool:
        """Insert the application unless its council reference is already stored."""
        with self.engine.begin() as conn:
            result = conn.execute(
                text(
                    """
                    INSERT INTO data (
                        council_reference,
                        address,
                        description,
                        info_url,
                        comment_url,
                        date_scraped,
                        date_received,
                        on_notice_from,
                        on_notice_to
                    )
                    VALUES (
                        :council_reference,
                        :address,
                        :description,
                        :info_url,
                        :comment_url,
                        :date_scraped,
                        :date_received,
                        :on_notice_from,
                        :on_notice_to
                    )
                    ON CONFLICT (council_reference) DO NOTHING
                    """
                ),
                application.as_row(),
            )
            return result.rowcount > 0

    def fetch_application(self, council_reference: str) -> Optional[dict]:
        with self.Session() as session:
            row = session.execute(
                text(
                    f"""
                    SELECT {", ".join(COLUMNS)}
                    FROM data
                    WHERE council_reference = :council_reference
                    """
                ),
                {"council_reference": council_reference},
            ).mappings().first()

            if not row:
                return None
            return dict(row)

    def count(self) -> int:
        with self.Session() as session:
            return session.execute(text("SELECT COUNT(*) FROM data")).scalar_one()
