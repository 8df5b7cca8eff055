"""Tests for the CLI helpers and batch mode."""
import csv
from unittest.mock import MagicMock

import pytest

from conftest import FakeProvider
from main import display_postcode, html_to_text, load_postcodes_from_csv, render_location, run_batch
from postcode_locator.geocode_adapter import GeocodeAdapter
from postcode_locator.location_store import LocationStore
from postcode_locator.models import GeocodeResponse, Location
from postcode_locator.search_controller import SearchController


def test_html_to_text():
    assert html_to_text("<p>Open <b>9-5</b></p>\n<p>Tea &amp; cake</p>") == "Open 9-5 Tea & cake"


def test_render_location():
    location = Location(latitude=51.0, longitude=-1.0, title="Near Store", description="<p>Hi</p>")
    text = render_location(location, 3.56)
    assert "Near Store" in text
    assert "3.6 miles away" in text
    assert "Hi" in text


def test_render_location_shows_normalised_postcode():
    location = Location(latitude=51.0, longitude=-1.0, title="Near Store", description="")
    assert "(nearest to RG45 6AJ)" in render_location(location, 3.56, " rg456aj")


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("rg456aj", "RG45 6AJ"), (" m1 1ae ", "M1 1AE"), (" not a postcode ", "not a postcode")],
)
def test_display_postcode(raw, expected):
    assert display_postcode(raw) == expected


def test_load_postcodes_from_csv(tmp_path):
    path = tmp_path / "postcodes.csv"
    path.write_text("Postcode,Name\nRG45 6AJ,a\n,b\n  m11ae ,c\n", encoding="utf-8")
    assert load_postcodes_from_csv(str(path)) == ["RG45 6AJ", "m11ae"]


def test_load_postcodes_requires_column(tmp_path):
    path = tmp_path / "postcodes.csv"
    path.write_text("Name\na\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_postcodes_from_csv(str(path))


@pytest.mark.asyncio
async def test_run_batch(tmp_path, locations_client):
    store = LocationStore(locations_client)
    await store.refresh()
    provider = FakeProvider(GeocodeResponse(status="OK", lat=51.05, lng=-1.02))
    controller = SearchController(GeocodeAdapter(provider), store, notifier=MagicMock(), max_range_miles=10)

    input_path = tmp_path / "postcodes.csv"
    input_path.write_text("Postcode\nrg456aj\nnot a postcode\n", encoding="utf-8")
    output_path = tmp_path / "out.csv"

    await run_batch(controller, str(input_path), str(output_path))

    with open(output_path, newline="") as f:
        rows = list(csv.reader(f))
    assert rows[0] == ["Postcode", "Title", "DistanceMiles"]
    assert rows[1][:2] == ["RG45 6AJ", "Near Store"]
    assert 3.0 < float(rows[1][2]) < 4.0
    assert rows[2] == ["not a postcode", "", ""]
