from whyalla_da.config import DEFAULT_SUBURB_NAMES_PATH
from whyalla_da.suburbs import SuburbLookup, load_suburbs


def test_resolve_adds_state_and_postcode(suburbs):
    assert suburbs.resolve("Whyalla") == "Whyalla, SA 5600"
    assert suburbs.resolve("WHYALLA NORRIE") == "Whyalla Norrie, SA 5608"


def test_resolve_handles_doubled_names(suburbs):
    assert suburbs.resolve("Whyalla Stuart Whyalla Stuart") == "Whyalla Stuart, SA 5608"
    assert suburbs.resolve("Whyalla Whyalla") == "Whyalla, SA 5600"


def test_resolve_falls_back_to_input(suburbs):
    assert suburbs.resolve("Port Augusta") == "Port Augusta"
    assert suburbs.resolve("Iron Knob Iron Knob") == "Iron Knob Iron Knob"


def test_from_lines_skips_blank_lines():
    lookup = SuburbLookup.from_lines(["", "Iron Knob,SA 5611", "   ", "Roopena"])
    assert len(lookup) == 2
    assert "iron knob" in lookup
    assert lookup.get("Roopena") == "Roopena"


def test_packaged_suburb_names_load():
    lookup = load_suburbs(DEFAULT_SUBURB_NAMES_PATH)
    assert lookup.resolve("Whyalla") == "Whyalla, SA 5600"
    assert lookup.resolve("Whyalla Jenkins") == "Whyalla Jenkins, SA 5609"
