import json

import pytest
from typer.testing import CliRunner

from whyalla_da.cli import app
from whyalla_da.db import ApplicationDatabase
from whyalla_da.models import DevelopmentApplication

runner = CliRunner()


def _json_lines(output):
    return [line for line in output.splitlines() if line.startswith("{")]


@pytest.fixture()
def database_url(monkeypatch, tmp_path):
    url = f"sqlite:///{tmp_path / 'data.sqlite'}"
    monkeypatch.setenv("DATABASE_URL", url)
    monkeypatch.delenv("DOCUMENT_LAYOUT", raising=False)
    monkeypatch.setattr("whyalla_da.runtime.configure_logging", lambda level: None)
    return url


def test_query_prints_stored_application(database_url):
    database = ApplicationDatabase(database_url)
    database.ensure_schema()
    database.insert_application(
        DevelopmentApplication(
            application_number="123/456",
            address="10 Main Rd, Whyalla, SA 5600",
            description="Carport",
            information_url="https://example.com/register.pdf",
            comment_url="mailto:customer.service@whyalla.sa.gov.au",
            scrape_date="2020-04-01",
        )
    )
    database.dispose()

    result = runner.invoke(app, ["query", "123/456"])

    assert result.exit_code == 0
    row = json.loads(_json_lines(result.stdout)[0])
    assert row["address"] == "10 Main Rd, Whyalla, SA 5600"
    assert row["date_received"] == ""


def test_query_missing_reference_exits_non_zero(database_url):
    result = runner.invoke(app, ["query", "999/999"])
    assert result.exit_code == 1


def test_parse_prints_json_lines(database_url, register_section, monkeypatch, tmp_path):
    path = tmp_path / "register.pdf"
    path.write_bytes(b"%PDF-1.4")
    monkeypatch.setattr(
        "whyalla_da.loader.decode_pdf",
        lambda content, x_tolerance: [register_section(number="100/001")],
    )

    result = runner.invoke(app, ["parse", str(path), "--url", "https://example.com/r.pdf", "--store"])

    assert result.exit_code == 0
    lines = _json_lines(result.stdout)
    assert len(lines) == 1
    record = json.loads(lines[0])
    assert record["application_number"] == "100/001"
    assert record["information_url"] == "https://example.com/r.pdf"

    database = ApplicationDatabase(database_url)
    try:
        assert database.count() == 1
    finally:
        database.dispose()
