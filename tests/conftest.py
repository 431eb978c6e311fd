from datetime import date

import pytest

from whyalla_da.models import Fragment
from whyalla_da.parser import ParseContext
from whyalla_da.suburbs import SuburbLookup

INFO_URL = "https://www.whyalla.sa.gov.au/webdata/resources/files/Development Register March 2020.pdf"
COMMENT_URL = "mailto:customer.service@whyalla.sa.gov.au"


@pytest.fixture()
def suburbs():
    return SuburbLookup.from_lines(
        [
            "Whyalla,SA 5600",
            "Whyalla Norrie,SA 5608",
            "Whyalla Stuart,SA 5608",
        ]
    )


@pytest.fixture()
def context(suburbs):
    return ParseContext(
        information_url=INFO_URL,
        comment_url=COMMENT_URL,
        suburbs=suburbs,
        scrape_date=date(2020, 4, 1),
    )


@pytest.fixture()
def register_section():
    """Build the fragments of one register entry with its top row at ``top``."""

    def build(
        top=100.0,
        number="123/456",
        received="12/03/2020",
        house="10",
        street="Main Rd",
        suburb="Whyalla",
        description="Carport",
    ):
        cells = [
            # label column, value column, right-hand label column, its values
            ("Application No", 20, 0, 70),
            (number, 110, 0, 60),
            ("Application Date", 300, 0, 80),
            (received, 390, 0, 60),
            ("Planning Approval", 520, 0, 70),
            ("Applicants Name", 20, 15, 70),
            ("J Smith", 110, 15, 60),
            ("Application received", 300, 15, 80),
            ("12/03/2020", 390, 15, 60),
            ("Property House No", 20, 30, 70),
            (house, 110, 30, 30),
            ("Planning Conditions", 300, 30, 80),
            ("3", 390, 30, 10),
            ("Lot", 20, 45, 20),
            ("12", 110, 45, 20),
            ("Property street", 20, 60, 70),
            (street, 110, 60, 80),
            ("Property suburb", 20, 75, 70),
            (suburb, 110, 75, 80),
            ("Title", 20, 90, 30),
            ("CT 5123/456", 110, 90, 60),
            ("Development Description", 20, 105, 110),
            ("Relevant Authority", 300, 105, 80),
            ("Council", 390, 105, 50),
            (description, 20, 120, 200),
        ]
        return [
            Fragment(text=text, x=float(x), y=top + dy, width=float(width), height=10.0)
            for text, x, dy, width in cells
            if text is not None
        ]

    return build
