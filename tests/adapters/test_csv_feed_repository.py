"""Tests for the CSV feed repository adapter."""

import csv
from unittest.mock import patch

import pytest

from stop_router.adapters.feed import CSVFeedRepository
from stop_router.config import FeedConfig, RoutingConfig
from stop_router.domain.errors import FeedError
from stop_router.domain.models import Edge, Stop, StopTime
from stop_router.services import RoutePlannerService


class TestCSVFeedRepository:
    """Test suite for CSVFeedRepository."""

    @pytest.fixture
    def repository(self, feed_config):
        return CSVFeedRepository(feed_config)

    def test_load_stops_normalizes_names_and_skips_bad_rows(self, repository):
        stops = repository.load_stops()

        assert [stop.stop_id for stop in stops] == [2, 5, 7, 9, 12]
        assert stops[0] == Stop(
            stop_id=2,
            name="HASTINGS ST FS HOLDOM AVE WB",
            raw_name="WB HASTINGS ST FS HOLDOM AVE",
        )
        assert stops[2].name == "BROADWAY STN BAY 3"

    def test_load_stop_times_keeps_file_order(self, repository):
        stop_times = repository.load_stop_times()

        assert len(stop_times) == 7
        assert stop_times[0] == StopTime("9017927", "5:25:00", 2)
        assert stop_times[-1] == StopTime("100", "25:12:00", 2)

    def test_load_edges_from_trips_and_transfers(self, repository):
        edges = repository.load_edges(RoutingConfig())

        assert edges == [
            Edge(2, 5, 1.0),
            Edge(5, 7, 1.0),
            Edge(9, 12, 1.0),
            Edge(7, 2, 1.0),
            Edge(7, 9, 3.0),
            Edge(12, 2, 2.0),
        ]

    def test_load_edges_uses_configured_costs(self, repository):
        routing = RoutingConfig(
            hop_cost=4, fixed_transfer_cost=0.5, timed_transfer_divisor=60
        )
        edges = repository.load_edges(routing)

        assert edges[0].weight == 4.0
        assert Edge(7, 9, 5.0) in edges
        assert Edge(12, 2, 0.5) in edges

    def test_vertex_count_is_largest_id_plus_one(self, repository):
        assert repository.vertex_count() == 13

    def test_results_are_cached(self, repository):
        first = repository.load_stops()
        with patch.object(repository, "_read_rows") as mock_read:
            assert repository.load_stops() is first
            mock_read.assert_not_called()

        repository.clear_cache()
        assert repository.load_stops() is not first
        assert repository.load_stops() == first

    def test_stops_by_id(self, repository):
        assert repository.stops_by_id()[9].name == "MAIN ST FS 12TH AVE NB"

    def test_missing_file_raises_feed_error(self, tmp_path):
        repository = CSVFeedRepository(FeedConfig(data_dir=tmp_path))

        with pytest.raises(FeedError) as excinfo:
            repository.load_stops()
        assert excinfo.value.file_path.endswith("stops.txt")
        assert isinstance(excinfo.value.cause, OSError)

    def test_empty_stops_file_gives_no_vertices(self, tmp_path):
        (tmp_path / "stops.txt").write_text("stop_id,stop_name\n", encoding="utf-8")
        repository = CSVFeedRepository(FeedConfig(data_dir=tmp_path))

        assert repository.load_stops() == []
        assert repository.vertex_count() == 0

    @pytest.mark.parametrize("min_time", ["-60", "nan", "inf", "soon"])
    def test_invalid_timed_transfer_is_skipped(self, feed_dir, min_time):
        (feed_dir / "transfers.txt").write_text(
            "from_stop_id,to_stop_id,transfer_type,min_transfer_time\n"
            "7,9,2,300\n"
            f"5,12,2,{min_time}\n",
            encoding="utf-8",
        )
        repository = CSVFeedRepository(FeedConfig(data_dir=feed_dir))

        assert [edge for edge in repository.load_edges(RoutingConfig()) if edge.from_id == 5] == [
            Edge(5, 7, 1.0)
        ]
        planner = RoutePlannerService(repository, RoutingConfig())
        route = planner.plan("BROADWAY STN BAY 3", "MAIN ST FS 16TH AVE NB")
        assert route.total_cost == 4.0

    def test_undecodable_file_raises_feed_error(self, tmp_path):
        (tmp_path / "stops.txt").write_bytes(b"stop_id,stop_name\n1,CAF\xe9 ST\n")
        repository = CSVFeedRepository(FeedConfig(data_dir=tmp_path))

        with pytest.raises(FeedError) as excinfo:
            repository.load_stops()
        assert excinfo.value.file_path.endswith("stops.txt")
        assert isinstance(excinfo.value.cause, UnicodeDecodeError)

    def test_malformed_csv_raises_feed_error(self, tmp_path):
        (tmp_path / "stops.txt").write_text("stop_id,stop_name\n1,MAIN ST\n", encoding="utf-8")
        repository = CSVFeedRepository(FeedConfig(data_dir=tmp_path))

        with patch("csv.DictReader", side_effect=csv.Error("line contains NUL")):
            with pytest.raises(FeedError) as excinfo:
                repository.load_stops()
        assert isinstance(excinfo.value.cause, csv.Error)
