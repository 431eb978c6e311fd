from dataclasses import replace

import pytest
import structlog

from whyalla_da.config import load_config
from whyalla_da.db import ApplicationDatabase
from whyalla_da.loader import ApplicationLoader
from whyalla_da.parser import DocumentError

REGISTER_URL = "https://www.whyalla.sa.gov.au/webdata/resources/files/Development Register March 2020.pdf"
BROKEN_URL = "https://www.whyalla.sa.gov.au/webdata/resources/files/Development Register February 2020.pdf"
MISSING_URL = "https://www.whyalla.sa.gov.au/webdata/resources/files/Development Register January 2020.pdf"


class FakeScraper:
    def __init__(self, documents):
        self.documents = documents
        self.fetched = []
        self.contexts = []

    def selected_documents(self):
        return list(self.documents)

    def fetch_document(self, url):
        self.fetched.append(url)
        self.contexts.append(structlog.contextvars.get_contextvars().get("document"))
        return self.documents[url]


@pytest.fixture()
def database(tmp_path):
    database = ApplicationDatabase(f"sqlite:///{tmp_path / 'data.sqlite'}")
    yield database
    database.dispose()


@pytest.fixture()
def config(monkeypatch, tmp_path):
    monkeypatch.delenv("DOCUMENT_LAYOUT", raising=False)
    return replace(load_config(), database_url=f"sqlite:///{tmp_path / 'data.sqlite'}")


@pytest.fixture()
def decoded_pages(monkeypatch, register_section):
    pages = {
        b"march": [register_section(number="100/001"), register_section(number="100/002", suburb="")],
    }

    def fake_decode(content, x_tolerance):
        if content not in pages:
            raise DocumentError("Unable to open PDF: broken")
        return pages[content]

    monkeypatch.setattr("whyalla_da.loader.decode_pdf", fake_decode)
    return pages


def test_run_stores_new_applications_once(config, database, suburbs, decoded_pages):
    scraper = FakeScraper(
        {
            REGISTER_URL: b"march",
            BROKEN_URL: b"garbage",
            MISSING_URL: None,
        }
    )
    loader = ApplicationLoader(config, scraper, database, suburbs)

    assert loader.run() == 1
    assert scraper.fetched == [REGISTER_URL, BROKEN_URL, MISSING_URL]

    row = database.fetch_application("100/001")
    assert row["info_url"] == REGISTER_URL
    assert row["address"] == "10 Main Rd, Whyalla, SA 5600"
    assert database.fetch_application("100/002") is None

    assert loader.run() == 0
    assert database.count() == 1


def test_run_without_documents(config, database, suburbs):
    loader = ApplicationLoader(config, FakeScraper({}), database, suburbs)
    assert loader.run() == 0
    assert database.count() == 0


def test_parse_file_defaults_url_to_file_uri(config, database, suburbs, decoded_pages, tmp_path):
    path = tmp_path / "register.pdf"
    path.write_bytes(b"march")
    loader = ApplicationLoader(config, FakeScraper({}), database, suburbs)

    applications = loader.parse_file(path)

    assert [a.application_number for a in applications] == ["100/001"]
    assert applications[0].information_url == path.resolve().as_uri()
    assert applications[0].comment_url == config.comment_url


def test_run_binds_each_document_to_the_log_context(config, database, suburbs, decoded_pages):
    scraper = FakeScraper({REGISTER_URL: b"march", MISSING_URL: None})
    loader = ApplicationLoader(config, scraper, database, suburbs)

    loader.run()

    assert scraper.contexts == [REGISTER_URL, MISSING_URL]
    assert "document" not in structlog.contextvars.get_contextvars()
