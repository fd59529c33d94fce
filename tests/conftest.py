"""
Shared fixtures: raw outage and temperature files written to tmp_path.
"""

import pytest

from raw_sources import (
    make_raw_event,
    temperature_lines,
    write_outage_csv,
    write_temperature_file,
)


@pytest.fixture
def texas_2011():
    """Texas 2011 temperatures: August at 85.0 F."""
    values = [45.0, 50.0, 60.0, 68.0, 75.0, 82.0, 84.0, 85.0, 78.0, 66.0, 55.0, 47.0]
    return {("Texas", 2011): values}


@pytest.fixture
def temperature_file(tmp_path, texas_2011):
    lines = temperature_lines([1999, 2011], overrides=texas_2011)
    return write_temperature_file(tmp_path / "climdiv-tmpcst.txt", lines)


@pytest.fixture
def raw_events():
    return [
        make_raw_event(
            OBS=1,
            YEAR=2011,
            MONTH=8,
            **{
                "U.S._STATE": "Texas",
                "POSTAL.CODE": "TX",
                "CAUSE.CATEGORY": "severe weather",
                "CAUSE.CATEGORY.DETAIL": "heatwave",
                "OUTAGE.DURATION": 3000,
            },
        ),
        make_raw_event(
            OBS=2,
            YEAR=2011,
            MONTH=1,
            **{
                "U.S._STATE": "Texas",
                "POSTAL.CODE": "TX",
                "CAUSE.CATEGORY": "severe weather",
                "CAUSE.CATEGORY.DETAIL": "winter storm",
                "OUTAGE.DURATION": 1500,
            },
        ),
        make_raw_event(
            OBS=3,
            YEAR=2011,
            MONTH=8,
            **{
                "U.S._STATE": "California",
                "POSTAL.CODE": "CA",
                "CAUSE.CATEGORY": "severe weather",
                "CAUSE.CATEGORY.DETAIL": "earthquake",
                "OUTAGE.DURATION": 200,
            },
        ),
        make_raw_event(
            OBS=4,
            YEAR=2011,
            MONTH=6,
            **{
                "U.S._STATE": "Ohio",
                "POSTAL.CODE": "OH",
                "CAUSE.CATEGORY": "intentional attack",
                "CAUSE.CATEGORY.DETAIL": "vandalism",
                "OUTAGE.DURATION": 60,
            },
        ),
        make_raw_event(
            OBS=5,
            YEAR=2011,
            MONTH=10,
            **{
                "U.S._STATE": "Florida",
                "POSTAL.CODE": "FL",
                "CAUSE.CATEGORY": "severe weather",
                "CAUSE.CATEGORY.DETAIL": "thunderstorm",
                "OUTAGE.DURATION": 45000,
            },
        ),
        # Alaska has no NOAA statewide row in this file
        make_raw_event(
            OBS=6,
            YEAR=2011,
            MONTH=3,
            **{
                "U.S._STATE": "Alaska",
                "POSTAL.CODE": "AK",
                "CAUSE.CATEGORY": "equipment failure",
                "OUTAGE.DURATION": 900,
            },
        ),
        make_raw_event(
            OBS=7,
            YEAR=2011,
            MONTH=5,
            **{
                "U.S._STATE": "Minnesota",
                "POSTAL.CODE": "MN",
                "CAUSE.CATEGORY": "severe weather",
                "OUTAGE.DURATION": "",
            },
        ),
    ]


@pytest.fixture
def outage_file(tmp_path, raw_events):
    return write_outage_csv(tmp_path / "outage.csv", raw_events)
