"""Runtime wiring for CLI entrypoints."""

from __future__ import annotations

from dataclasses import dataclass

from .config import AppConfig, load_config
from .db import ApplicationDatabase
from .loader import ApplicationLoader
from .logging import configure_logging
from .scraper import WhyallaScraper
from .suburbs import SuburbLookup, load_suburbs


@dataclass(slots=True)
class Runtime:
    config: AppConfig
    database: ApplicationDatabase
    scraper: WhyallaScraper
    suburbs: SuburbLookup
    loader: ApplicationLoader

    def close(self) -> None:
        self.scraper.close()
        self.database.dispose()


def build_runtime(config: AppConfig | None = None) -> Runtime:
    cfg = config or load_config()
    configure_logging(cfg.log_level)

    database = ApplicationDatabase(cfg.database_url)
    suburbs = load_suburbs(cfg.suburb_names_path)
    scraper = WhyallaScraper(
        listing_url=cfg.listing_url,
        timeout=cfg.http_timeout,
        retries=cfg.http_retries,
        user_agent=cfg.http_user_agent,
        proxy=cfg.http_proxy,
        delay=cfg.request_delay,
        jitter=cfg.request_jitter,
        select_all=cfg.select_all_documents,
    )
    loader = ApplicationLoader(cfg, scraper, database, suburbs)

    return Runtime(
        config=cfg,
        database=database,
        scraper=scraper,
        suburbs=suburbs,
        loader=loader,
    )
