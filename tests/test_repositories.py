"""
Tests for the pool price and load repositories against a fake session.
"""

from datetime import date

import pytest
import requests

from pricing_api.config import ApplicationConfig, UpstreamConfig
from pricing_api.exceptions import (
    AuthenticationFailure, ConfigurationFailure, UpstreamFailure, ValidationFailure
)
from pricing_api.models import DateChunk, EnrichedData, EnrichmentSkipped
from pricing_api.repositories import PoolPriceRepository, LoadRepository
from pricing_api.services import merge_load_data

from factories import (
    FakeResponse, FakeSession, price_row, load_row, price_payload, load_payload,
    build_points, utc
)

CHUNK = DateChunk(start=date(2024, 1, 15), end=date(2024, 1, 15))


def _price_repo(config, retry_policy, *responses):
    session = FakeSession({"poolPrice": list(responses)})
    return PoolPriceRepository(config, session=session, retry_policy=retry_policy), session


def _load_repo(config, retry_policy, *responses):
    session = FakeSession({"albertaInternalLoad": list(responses)})
    return LoadRepository(config, session=session, retry_policy=retry_policy), session


class TestPoolPriceRequest:
    """Outbound request shape."""

    def test_sends_dates_and_api_key(self, config, retry_policy):
        repo, session = _price_repo(config, retry_policy, FakeResponse(200, price_payload([])))
        repo.find_by_chunk(CHUNK)

        call = session.calls[0]
        assert call["url"] == "https://aeso.test/public/poolprice-api/v1.1/price/poolPrice"
        assert call["params"] == {"startDate": "2024-01-15", "endDate": "2024-01-15"}
        assert call["headers"]["API-KEY"] == "test-key"

    def test_missing_api_key_is_configuration_failure(self, retry_policy):
        config = ApplicationConfig(upstream=UpstreamConfig(api_key=None))
        repo, session = _price_repo(config, retry_policy, FakeResponse(200, price_payload([])))
        with pytest.raises(ConfigurationFailure):
            repo.find_by_chunk(CHUNK)
        assert session.calls == []

    def test_window_over_limit_is_rejected_before_sending(self, config, retry_policy):
        repo, session = _price_repo(config, retry_policy, FakeResponse(200, price_payload([])))
        with pytest.raises(ValidationFailure):
            repo.find_by_chunk(DateChunk(start=date(2022, 1, 1), end=date(2024, 1, 1)))
        assert session.calls == []


class TestPoolPriceMapping:
    """Envelope unwrapping and row normalization."""

    def test_rows_become_sorted_price_points(self, config, retry_policy):
        rows = [
            price_row("2024-01-15 08:00", "75.10", "2024-01-15 01:00"),
            price_row("2024-01-15 07:00", "50.25", "2024-01-15 00:00"),
        ]
        repo, _ = _price_repo(config, retry_policy, FakeResponse(200, price_payload(rows)))
        points = repo.find_by_chunk(CHUNK)

        assert [p.price for p in points] == [50.25, 75.10]
        assert points[0].timestamp == utc(2024, 1, 15, 7)
        assert points[0].market_time.hour == 0
        assert points[0].load is None

    def test_unsettled_hours_are_dropped_but_zero_is_kept(self, config, retry_policy):
        rows = [
            price_row("2024-01-15 07:00", "0.00"),
            price_row("2024-01-15 08:00", ""),
        ]
        repo, _ = _price_repo(config, retry_policy, FakeResponse(200, price_payload(rows)))
        points = repo.find_by_chunk(CHUNK)

        assert len(points) == 1
        assert points[0].price == 0.0

    def test_market_time_derived_when_not_published(self, config, retry_policy):
        rows = [price_row("2024-07-01 18:00", "40.00")]
        repo, _ = _price_repo(config, retry_policy, FakeResponse(200, price_payload(rows)))
        point = repo.find_by_chunk(CHUNK)[0]
        # MDT is UTC-6 in July
        assert point.market_time.hour == 12

    def test_malformed_rows_are_skipped(self, config, retry_policy):
        rows = [
            price_row("not a timestamp", "10.00"),
            price_row("2024-01-15 09:00", "abc"),
            price_row("2024-01-15 10:00", "12.50"),
        ]
        repo, _ = _price_repo(config, retry_policy, FakeResponse(200, price_payload(rows)))
        assert [p.price for p in repo.find_by_chunk(CHUNK)] == [12.50]

    def test_rows_without_timestamp_are_skipped(self, config, retry_policy):
        missing = price_row("2024-01-15 08:00", "20.00")
        missing.pop("begin_datetime_utc")
        rows = [
            price_row(None, "10.00"),
            missing,
            price_row("2024-01-15 10:00", "12.50"),
        ]
        repo, _ = _price_repo(config, retry_policy, FakeResponse(200, price_payload(rows)))
        assert [p.price for p in repo.find_by_chunk(CHUNK)] == [12.50]

    def test_numeric_values_are_accepted(self, config, retry_policy):
        row = price_row("2024-01-15 07:00", 53.2)
        row["forecast_pool_price"] = 48
        row["rolling_30day_avg"] = 61.75
        repo, _ = _price_repo(config, retry_policy, FakeResponse(200, price_payload([row])))
        point = repo.find_by_chunk(CHUNK)[0]

        assert point.price == 53.2
        assert point.forecast_price == 48.0
        assert point.rolling_30day_avg == 61.75

    def test_numeric_zero_price_is_kept(self, config, retry_policy):
        rows = [price_row("2024-01-15 07:00", 0)]
        repo, _ = _price_repo(config, retry_policy, FakeResponse(200, price_payload(rows)))
        assert [p.price for p in repo.find_by_chunk(CHUNK)] == [0.0]

    def test_missing_envelope_is_validation_failure(self, config, retry_policy):
        repo, _ = _price_repo(config, retry_policy, FakeResponse(200, {"return": {}}))
        with pytest.raises(ValidationFailure):
            repo.find_by_chunk(CHUNK)

    def test_invalid_json_is_upstream_failure(self, config, retry_policy):
        repo, _ = _price_repo(config, retry_policy, FakeResponse(200, ValueError("no json")))
        with pytest.raises(UpstreamFailure):
            repo.find_by_chunk(CHUNK)


class TestPoolPriceErrors:
    """HTTP status classification and retries."""

    @pytest.mark.parametrize("status", [401, 403])
    def test_auth_statuses(self, config, retry_policy, status):
        repo, session = _price_repo(config, retry_policy, FakeResponse(status, text="denied"))
        with pytest.raises(AuthenticationFailure):
            repo.find_by_chunk(CHUNK)
        assert len(session.calls) == 1

    def test_bad_request_is_validation_failure(self, config, retry_policy):
        repo, _ = _price_repo(config, retry_policy, FakeResponse(400, text="bad dates"))
        with pytest.raises(ValidationFailure):
            repo.find_by_chunk(CHUNK)

    def test_server_error_is_retried(self, config, retry_policy, sleeps):
        ok = FakeResponse(200, price_payload([price_row("2024-01-15 07:00", "30.00")]))
        repo, session = _price_repo(config, retry_policy, FakeResponse(503, text="busy"), ok)
        points = repo.find_by_chunk(CHUNK)

        assert len(points) == 1
        assert len(session.calls) == 2
        assert len(sleeps) == 1

    def test_persistent_server_error_surfaces_status(self, config, retry_policy):
        repo, session = _price_repo(config, retry_policy, FakeResponse(500, text="down"))
        with pytest.raises(UpstreamFailure) as exc_info:
            repo.find_by_chunk(CHUNK)
        assert exc_info.value.upstream_status == 500
        assert len(session.calls) == config.retry.max_attempts

    def test_transport_error_is_upstream_failure(self, config, retry_policy):
        repo, _ = _price_repo(config, retry_policy, requests.ConnectionError("reset"))
        with pytest.raises(UpstreamFailure):
            repo.find_by_chunk(CHUNK)


class TestLoadRepository:
    """Enrichment outcomes are returned, never raised."""

    def test_lookup_keyed_by_utc_hour(self, config, retry_policy):
        rows = [load_row("2024-01-15 07:00", "10500"), load_row("2024-01-15 08:00", "10800")]
        repo, _ = _load_repo(config, retry_policy, FakeResponse(200, load_payload(rows)))
        outcome = repo.fetch_load_lookup(CHUNK)

        assert isinstance(outcome, EnrichedData)
        assert outcome.lookup[utc(2024, 1, 15, 7)].load == 10500.0

    def test_numeric_loads_are_accepted(self, config, retry_policy):
        rows = [load_row("2024-01-15 07:00", 9640), load_row("2024-01-15 08:00", 9712.5)]
        repo, _ = _load_repo(config, retry_policy, FakeResponse(200, load_payload(rows)))
        outcome = repo.fetch_load_lookup(CHUNK)

        assert isinstance(outcome, EnrichedData)
        assert outcome.lookup[utc(2024, 1, 15, 7)].load == 9640.0
        assert outcome.lookup[utc(2024, 1, 15, 8)].load == 9712.5

    def test_rows_without_timestamp_are_ignored(self, config, retry_policy):
        rows = [load_row(None, "10100"), load_row("2024-01-15 07:00", "10500")]
        repo, _ = _load_repo(config, retry_policy, FakeResponse(200, load_payload(rows)))
        outcome = repo.fetch_load_lookup(CHUNK)

        assert isinstance(outcome, EnrichedData)
        assert list(outcome.lookup) == [utc(2024, 1, 15, 7)]

    def test_zero_and_empty_loads_are_ignored(self, config, retry_policy):
        rows = [load_row("2024-01-15 07:00", "0"), load_row("2024-01-15 08:00", "")]
        repo, _ = _load_repo(config, retry_policy, FakeResponse(200, load_payload(rows)))
        assert repo.fetch_load_lookup(CHUNK).is_skipped

    def test_empty_report_is_skipped(self, config, retry_policy):
        repo, _ = _load_repo(config, retry_policy, FakeResponse(200, load_payload([])))
        assert isinstance(repo.fetch_load_lookup(CHUNK), EnrichmentSkipped)

    def test_missing_envelope_is_skipped(self, config, retry_policy):
        repo, _ = _load_repo(config, retry_policy, FakeResponse(200, {"unexpected": True}))
        assert repo.fetch_load_lookup(CHUNK).is_skipped

    def test_upstream_errors_are_skipped(self, config, retry_policy):
        repo, _ = _load_repo(config, retry_policy, FakeResponse(401, text="denied"))
        outcome = repo.fetch_load_lookup(CHUNK)
        assert outcome.is_skipped
        assert "authentication" in outcome.reason

    def test_disabled_enrichment_makes_no_request(self, config, retry_policy):
        config.pipeline.enrichment_enabled = False
        repo, session = _load_repo(config, retry_policy, FakeResponse(200, load_payload([])))
        assert repo.fetch_load_lookup(CHUNK).is_skipped
        assert session.calls == []


class TestMergeLoadData:
    """Left join of load readings onto price points."""

    def test_matching_points_are_enriched(self, config, retry_policy):
        points = build_points([10, 20, 30], start=utc(2024, 1, 15, 7))
        rows = [load_row("2024-01-15 07:00", "10500"), load_row("2024-01-15 09:00", "11000")]
        repo, _ = _load_repo(config, retry_policy, FakeResponse(200, load_payload(rows)))

        matched = merge_load_data(points, repo.fetch_load_lookup(CHUNK))

        assert matched == 2
        assert [p.load for p in points] == [10500.0, None, 11000.0]
        assert [p.price for p in points] == [10.0, 20.0, 30.0]

    def test_skipped_outcome_leaves_points_untouched(self):
        points = build_points([10, 20])
        assert merge_load_data(points, EnrichmentSkipped("no data")) == 0
        assert all(p.load is None and p.generation is None for p in points)
