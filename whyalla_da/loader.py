"""Fetch, parse and store development applications."""

from __future__ import annotations

import gc
from datetime import date, datetime
from pathlib import Path
from typing import List, Optional

import structlog

from .config import AppConfig
from .db import ApplicationDatabase
from .decoder import decode_pdf
from .logging import get_logger
from .models import DevelopmentApplication
from .parser import DocumentError, Layout, ParseContext, parse_document
from .scraper import WhyallaScraper
from .suburbs import SuburbLookup

logger = get_logger(__name__)


class ApplicationLoader:
    def __init__(
        self,
        config: AppConfig,
        scraper: WhyallaScraper,
        database: ApplicationDatabase,
        suburbs: SuburbLookup,
    ) -> None:
        self.config = config
        self.scraper = scraper
        self.database = database
        self.suburbs = suburbs
        self.layout = Layout(config.layout)

    def run(self) -> int:
        """Process the selected register documents; returns the number of new rows."""
        self.database.ensure_schema()
        urls = self.scraper.selected_documents()
        if not urls:
            logger.info("no_documents_found", url=self.config.listing_url)
            return 0

        inserted = 0
        for url in urls:
            with structlog.contextvars.bound_contextvars(document=url):
                inserted += self._load_document(url)

        logger.info("run_completed", documents=len(urls), inserted=inserted)
        return inserted

    def _load_document(self, url: str) -> int:
        content = self.scraper.fetch_document(url)
        if content is None:
            return 0
        try:
            applications = self.parse_bytes(content, url)
        except DocumentError as exc:
            logger.error("parse_document_error", url=url, error=str(exc))
            return 0
        del content
        gc.collect()
        return self.store(applications)

    def parse_file(
        self,
        path: Path,
        information_url: Optional[str] = None,
        layout: Optional[Layout] = None,
    ) -> List[DevelopmentApplication]:
        url = information_url or Path(path).resolve().as_uri()
        logger.info("parse_file", path=str(path), url=url)
        return self.parse_bytes(Path(path).read_bytes(), url, layout)

    def parse_bytes(
        self,
        content: bytes,
        information_url: str,
        layout: Optional[Layout] = None,
    ) -> List[DevelopmentApplication]:
        pages = decode_pdf(content, x_tolerance=self.config.pdf_x_tolerance)
        return parse_document(pages, self._context(information_url), layout or self.layout)

    def store(self, applications: List[DevelopmentApplication]) -> int:
        inserted = 0
        for application in applications:
            if self.database.insert_application(application):
                inserted += 1
                logger.info(
                    "application_inserted",
                    application_number=application.application_number,
                    address=application.address,
                    description=application.description,
                )
            else:
                logger.info(
                    "application_skipped",
                    reason="already present",
                    application_number=application.application_number,
                    address=application.address,
                )
        return inserted

    def _context(self, information_url: str) -> ParseContext:
        return ParseContext(
            information_url=information_url,
            comment_url=self.config.comment_url,
            suburbs=self.suburbs,
            scrape_date=self._today(),
        )

    def _today(self) -> date:
        return datetime.now(self.config.timezone).date()
