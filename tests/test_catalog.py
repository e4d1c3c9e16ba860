import dataclasses

import pytest

from utils.catalog import (
    COSTUMES,
    DEFAULT_COSTUME,
    DEFAULT_LOCATION,
    LOCATIONS,
    is_known_costume,
    is_known_location,
    locations_by_region,
)


def test_defaults_are_first_entries():
    assert DEFAULT_LOCATION == "Sa Pa"
    assert DEFAULT_COSTUME == "Trang phục Tày"


def test_ids_are_unique():
    assert len({loc.id for loc in LOCATIONS}) == len(LOCATIONS)
    assert len({c.id for c in COSTUMES}) == len(COSTUMES)


def test_grouping_keeps_every_location_once():
    grouped = locations_by_region()

    assert [region for region, _ in grouped] == ["North", "Central", "South"]
    assert [loc for _, locs in grouped for loc in locs] == list(LOCATIONS)


def test_entries_are_immutable():
    with pytest.raises(dataclasses.FrozenInstanceError):
        LOCATIONS[0].name = "Hà Nội"


def test_lookup():
    assert is_known_location("Hang Sơn Đoòng")
    assert not is_known_location("Hạ Long")
    assert is_known_costume("Trang phục H'Mông")
    assert COSTUMES[6].short_name == "H'Mông"
