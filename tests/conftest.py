"""Shared fixtures: a tiny GTFS-style feed written to a temporary directory."""

from __future__ import annotations

from pathlib import Path

import pytest

from stop_router.config import FeedConfig, reset_config

STOPS = """\
stop_id,stop_code,stop_name,stop_desc,stop_lat,stop_lon,zone_id,stop_url,location_type,parent_station
2,50002,WB HASTINGS ST FS HOLDOM AVE,HASTINGS ST @ HOLDOM AVE,49.28,-122.98,ZN 1,,0,
5,50005,EB HASTINGS ST FS BOUNDARY RD,HASTINGS ST @ BOUNDARY RD,49.28,-123.02,ZN 1,,0,
7,50007,BROADWAY STN BAY 3,BROADWAY STATION,49.26,-123.06,ZN 1,,0,
9,50009,NB MAIN ST FS 12TH AVE,MAIN ST @ 12TH AVE,49.26,-123.10,ZN 1,,0,
12,50012,NB MAIN ST FS 16TH AVE,MAIN ST @ 16TH AVE,49.25,-123.10,ZN 1,,0,
,50099,NO ID STOP,,49.0,-123.0,ZN 1,,0,
"""

STOP_TIMES = """\
trip_id,arrival_time,departure_time,stop_id,stop_sequence,stop_headsign,pickup_type,drop_off_type,shape_dist_traveled
9017927,5:25:00,5:25:00,2,1,,0,0,
9017927,5:27:00,5:27:00,5,2,,0,0,0.4
9017927,5:30:00,5:30:00,7,3,,0,0,1.2
9017928,5:25:00,5:25:00,9,1,,0,0,
9017928,5:29:00,5:29:00,12,2,,0,0,0.8
100,25:10:00,25:10:00,7,1,,0,0,
100,25:12:00,25:12:00,2,2,,0,0,2.0
"""

TRANSFERS = """\
from_stop_id,to_stop_id,transfer_type,min_transfer_time
7,9,2,300
12,2,0,
5,12,1,
9,7,2,
"""


@pytest.fixture
def feed_dir(tmp_path: Path) -> Path:
    (tmp_path / "stops.txt").write_text(STOPS, encoding="utf-8")
    (tmp_path / "stop_times.txt").write_text(STOP_TIMES, encoding="utf-8")
    (tmp_path / "transfers.txt").write_text(TRANSFERS, encoding="utf-8")
    return tmp_path


@pytest.fixture
def feed_config(feed_dir: Path) -> FeedConfig:
    return FeedConfig(data_dir=feed_dir)


@pytest.fixture(autouse=True)
def fresh_config():
    reset_config()
    yield
    reset_config()
