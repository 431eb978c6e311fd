import pytest
from sqlalchemy import text

from whyalla_da.db import ApplicationDatabase
from whyalla_da.models import DevelopmentApplication


@pytest.fixture()
def sqlite_db(tmp_path):
    db_path = tmp_path / "test.db"
    database = ApplicationDatabase(f"sqlite:///{db_path}")
    database.ensure_schema()
    yield database
    database.dispose()


def _application(number="123/456", description="Carport"):
    return DevelopmentApplication(
        application_number=number,
        address="10 Main Rd, Whyalla, SA 5600",
        description=description,
        information_url="https://example.com/register.pdf",
        comment_url="mailto:customer.service@whyalla.sa.gov.au",
        scrape_date="2020-04-01",
        received_date="2020-03-12",
    )


def test_insert_application_ignores_existing_reference(sqlite_db):
    assert sqlite_db.insert_application(_application()) is True
    assert sqlite_db.insert_application(_application(description="Verandah")) is False

    row = sqlite_db.fetch_application("123/456")
    assert row == {
        "council_reference": "123/456",
        "address": "10 Main Rd, Whyalla, SA 5600",
        "description": "Carport",
        "info_url": "https://example.com/register.pdf",
        "comment_url": "mailto:customer.service@whyalla.sa.gov.au",
        "date_scraped": "2020-04-01",
        "date_received": "2020-03-12",
        "on_notice_from": None,
        "on_notice_to": None,
    }
    assert sqlite_db.count() == 1


def test_fetch_missing_application(sqlite_db):
    assert sqlite_db.fetch_application("999/999") is None


def test_ensure_schema_is_idempotent(sqlite_db):
    sqlite_db.insert_application(_application())
    sqlite_db.ensure_schema()

    with sqlite_db.engine.begin() as conn:
        columns = [row[1] for row in conn.execute(text("PRAGMA table_info(data)"))]
    assert columns[0] == "council_reference"
    assert len(columns) == 9
    assert sqlite_db.count() == 1
