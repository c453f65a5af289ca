from dataclasses import dataclass, field
from typing import List

import pytest

from stop_router.adapters.feed import CSVFeedRepository
from stop_router.config import RoutingConfig
from stop_router.domain.errors import (
    InvalidKeyError,
    InvalidTimeError,
    NoRouteFoundError,
    StopNotFoundError,
)
from stop_router.domain.models import Edge, Stop, StopTime, TripMatch
from stop_router.services import (
    RoutePlannerService,
    StopSearchService,
    TripSearchService,
)


@dataclass
class InMemoryFeed:
    """Feed repository fixture holding already-parsed records."""

    stops: List[Stop] = field(default_factory=list)
    stop_times: List[StopTime] = field(default_factory=list)
    edges: List[Edge] = field(default_factory=list)
    edge_loads: int = 0

    def load_stops(self):
        return self.stops

    def load_stop_times(self):
        return self.stop_times

    def load_edges(self, routing):
        self.edge_loads += 1
        return self.edges

    def vertex_count(self):
        return max((s.stop_id for s in self.stops), default=-1) + 1


@pytest.fixture
def triangle_feed():
    return InMemoryFeed(
        stops=[Stop(0, "ALPHA"), Stop(1, "BRAVO"), Stop(2, "CHARLIE"), Stop(3, "DELTA")],
        edges=[Edge(0, 1, 1), Edge(1, 2, 1), Edge(0, 2, 5)],
    )


@pytest.fixture
def feed_repository(feed_config):
    return CSVFeedRepository(feed_config)


def test_search_normalizes_query(feed_repository):
    service = StopSearchService(feed_repository)

    names = [stop.name for stop in service.search("hastings st")]
    assert names == ["HASTINGS ST FS BOUNDARY RD EB", "HASTINGS ST FS HOLDOM AVE WB"]
    assert [stop.stop_id for stop in service.search("Main")] == [9, 12]
    assert service.search("KINGSWAY") == []


def test_search_trailing_space_ends_word():
    feed = InMemoryFeed(
        stops=[Stop(0, "MAIN STREET STN"), Stop(1, "MAIN ST FS 12TH AVE"), Stop(2, "MAIN ST")]
    )
    service = StopSearchService(feed)

    assert [s.stop_id for s in service.search("main st")] == [2, 1, 0]
    assert [s.stop_id for s in service.search("main st ")] == [1]
    assert [s.stop_id for s in service.search("  main   st  ")] == [1]


def test_match_with_wildcards(feed_repository):
    service = StopSearchService(feed_repository)

    assert [s.stop_id for s in service.match("main st fs 1.th ave nb")] == [9, 12]
    assert [s.stop_id for s in service.match("MAIN ST FS 16.. AVE NB")] == [12]
    assert service.match("MAIN") == []


def test_resolve_accepts_raw_feed_name(feed_repository):
    service = StopSearchService(feed_repository)

    assert service.resolve("eb hastings st fs boundary rd").stop_id == 5
    assert service.resolve("HASTINGS ST FS BOUNDARY RD EB").stop_id == 5
    with pytest.raises(StopNotFoundError) as excinfo:
        service.resolve("nowhere")
    assert excinfo.value.stop_name == "NOWHERE"


def test_longest_prefix(feed_repository):
    service = StopSearchService(feed_repository)

    assert service.longest_prefix("BROADWAY STN BAY 3 PLATFORM").stop_id == 7
    assert service.longest_prefix("BROADWAY") is None


def test_blank_query_is_rejected(feed_repository):
    service = StopSearchService(feed_repository)
    with pytest.raises(InvalidKeyError):
        service.search("   ")


def test_trie_is_built_once(triangle_feed):
    service = StopSearchService(triangle_feed)
    assert service.trie is service.trie
    assert service.trie.size() == 4


def test_plan_by_name_over_feed(feed_repository):
    planner = RoutePlannerService(feed_repository, RoutingConfig())

    route = planner.plan("WB Hastings St FS Holdom Ave", "main st fs 16th ave nb")
    assert route.path == (2, 5, 7, 9, 12)
    assert route.total_cost == 6.0
    assert planner.format_route(route) == [
        "from index 2 to index 5 with cost of 1.0",
        "from index 5 to index 7 with cost of 1.0",
        "from index 7 to index 9 with cost of 3.0",
        "from index 9 to index 12 with cost of 1.0",
        "total cost: 6.0",
    ]


def test_plan_reports_missing_stop(feed_repository):
    planner = RoutePlannerService(feed_repository, RoutingConfig())

    with pytest.raises(StopNotFoundError, match="End stop not found"):
        planner.plan("BROADWAY STN BAY 3", "NOWHERE")
    with pytest.raises(StopNotFoundError, match="Start and end stop not found"):
        planner.plan("NOWHERE", "ELSEWHERE")


def test_plan_without_path_raises(triangle_feed):
    planner = RoutePlannerService(triangle_feed, RoutingConfig())

    with pytest.raises(NoRouteFoundError) as excinfo:
        planner.plan("ALPHA", "DELTA")
    assert (excinfo.value.departure, excinfo.value.arrival) == (0, 3)


def test_planner_uses_configured_policy(triangle_feed):
    textbook = RoutePlannerService(triangle_feed, RoutingConfig())
    reference = RoutePlannerService(
        triangle_feed, RoutingConfig(relaxation_policy="first_enqueue")
    )

    assert textbook.plan("ALPHA", "CHARLIE").total_cost == 2.0
    assert reference.plan("ALPHA", "CHARLIE").total_cost == 5.0


def test_graph_is_built_once_and_sized_for_transfers(triangle_feed):
    triangle_feed.edges.append(Edge(2, 6, 1))
    planner = RoutePlannerService(triangle_feed, RoutingConfig())

    assert planner.graph is planner.graph
    assert planner.graph.vertex_count == 7
    assert triangle_feed.edge_loads == 1


def test_same_stop_route_has_only_total(triangle_feed):
    planner = RoutePlannerService(triangle_feed, RoutingConfig())
    route = planner.plan("BRAVO", "bravo")
    assert planner.format_route(route) == ["total cost: 0.0"]


def test_trips_arriving_at(feed_repository):
    service = TripSearchService(feed_repository)

    assert service.trips_arriving_at("05:25:00") == [
        TripMatch("9017927", (2, 5, 7)),
        TripMatch("9017928", (9, 12)),
    ]
    assert service.trips_arriving_at(" 5 : 27 : 00 ") == [TripMatch("9017927", (2, 5, 7))]
    assert service.trips_arriving_at("23:59:59") == []


def test_trips_rejects_invalid_time(feed_repository):
    service = TripSearchService(feed_repository)
    with pytest.raises(InvalidTimeError):
        service.trips_arriving_at("25:10:00")


def test_trip_ids_sort_numerically_before_text():
    feed = InMemoryFeed(
        stop_times=[
            StopTime("x1", "8:00:00", 1),
            StopTime("10", "8:00:00", 2),
            StopTime("9", "8:00:00", 3),
        ]
    )
    trips = TripSearchService(feed).trips_arriving_at("8:00:00")
    assert [t.trip_id for t in trips] == ["9", "10", "x1"]
    assert TripSearchService.format_trip(trips[0]) == "Trip Id: 9 with stops : 3"
