"""Tests for the USGS feed client.

Uses the `responses` library to mock HTTP requests.
"""

import pytest
import requests
import responses

from quakewatch.shell.feed_client import FeedClient, FeedError


FEED_URL = "https://earthquake.usgs.gov/earthquakes/feed/v1.0/summary/all_hour.geojson"

FEED_BODY = {
    "type": "FeatureCollection",
    "metadata": {"generated": 1703001960000, "title": "USGS All Earthquakes, Past Hour", "count": 2},
    "features": [
        {
            "type": "Feature",
            "id": "b",
            "properties": {"mag": 2.1, "place": "Somewhere", "time": 2000, "ids": ",b,"},
            "geometry": {"type": "Point", "coordinates": [1.0, 2.0, 3.0]},
        },
        {
            "type": "Feature",
            "id": "a",
            "properties": {"mag": 1.1, "place": "Elsewhere", "time": 1000},
            "geometry": {"type": "Point", "coordinates": [4.0, 5.0, 6.0]},
        },
    ],
}


class TestFeedClientFetchSnapshot:
    """Tests for FeedClient.fetch_snapshot()."""

    @responses.activate
    def test_returns_parsed_snapshot(self):
        responses.add(responses.GET, FEED_URL, json=FEED_BODY, status=200)

        snapshot = FeedClient(url=FEED_URL).fetch_snapshot()

        assert [e.id for e in snapshot.events] == ["b", "a"]
        assert snapshot.metadata.title == "USGS All Earthquakes, Past Hour"
        assert snapshot.events[0].ids == ",b,"
        assert snapshot.events[1].ids == ""

    @responses.activate
    def test_defaults_to_all_hour_feed(self):
        responses.add(responses.GET, FEED_URL, json=FEED_BODY, status=200)

        FeedClient().fetch_snapshot()

        assert responses.calls[0].request.url == FEED_URL

    @responses.activate
    def test_http_error_is_fatal(self):
        responses.add(responses.GET, FEED_URL, status=503)

        with pytest.raises(FeedError) as exc_info:
            FeedClient(url=FEED_URL).fetch_snapshot()

        assert isinstance(exc_info.value.__cause__, requests.HTTPError)

    @responses.activate
    def test_connection_error_is_fatal(self):
        responses.add(
            responses.GET,
            FEED_URL,
            body=requests.ConnectionError("unreachable"),
        )

        with pytest.raises(FeedError):
            FeedClient(url=FEED_URL).fetch_snapshot()

    @responses.activate
    def test_malformed_json_is_fatal(self):
        responses.add(responses.GET, FEED_URL, body="{not json", status=200)

        with pytest.raises(FeedError):
            FeedClient(url=FEED_URL).fetch_snapshot()

    @responses.activate
    def test_wrong_document_shape_is_fatal(self):
        responses.add(responses.GET, FEED_URL, json=[1, 2, 3], status=200)

        with pytest.raises(FeedError):
            FeedClient(url=FEED_URL).fetch_snapshot()

    @responses.activate
    def test_bad_feature_is_tolerated(self):
        body = {"features": [FEED_BODY["features"][0], {"properties": {"mag": 9}}]}
        responses.add(responses.GET, FEED_URL, json=body, status=200)

        snapshot = FeedClient(url=FEED_URL).fetch_snapshot()

        assert [e.id for e in snapshot.events] == ["b"]

    @responses.activate
    def test_single_request_no_retry(self):
        responses.add(responses.GET, FEED_URL, status=500)

        with pytest.raises(FeedError):
            FeedClient(url=FEED_URL).fetch_snapshot()

        assert len(responses.calls) == 1
