"""Unit tests for core/telemetry.py."""

import pytest

from core.telemetry import RequestTelemetry


class TestRequestTelemetry:
    def test_track_step_records_duration(self):
        t = RequestTelemetry()
        with t.track_step("test_step"):
            pass
        assert t.steps["test_step"].duration_ms >= 0
        assert t.steps["test_step"].success is True

    def test_track_step_records_exception(self):
        t = RequestTelemetry()
        with pytest.raises(ValueError):
            with t.track_step("failing_step"):
                raise ValueError("boom")
        assert t.steps["failing_step"].success is False
        assert t.steps["failing_step"].error_type == "ValueError"

    def test_repeated_step_accumulates(self):
        t = RequestTelemetry()
        with t.track_step("lyrics_fetch"):
            pass
        first = t.steps["lyrics_fetch"].duration_ms
        with t.track_step("lyrics_fetch"):
            pass
        assert len(t.steps) == 1
        assert t.steps["lyrics_fetch"].duration_ms >= first

    def test_repeated_step_keeps_earlier_failure(self):
        t = RequestTelemetry()
        with pytest.raises(RuntimeError):
            with t.track_step("lyrics_fetch"):
                raise RuntimeError("x")
        with t.track_step("lyrics_fetch"):
            pass
        assert t.steps["lyrics_fetch"].success is False
        assert t.steps["lyrics_fetch"].error_type == "RuntimeError"

    def test_record_api_call_known_service(self):
        t = RequestTelemetry()
        t.record_api_call("qqmusic")
        t.record_api_call("qqmusic")
        t.record_api_call("spotify")
        assert t.api_calls == {"spotify": 1, "qqmusic": 2}

    def test_record_api_call_unknown_service(self):
        t = RequestTelemetry()
        t.record_api_call("unknown_service")
        assert "unknown_service" not in t.api_calls

    def test_get_step_timings(self):
        t = RequestTelemetry()
        with t.track_step("token"):
            pass
        with t.track_step("track_search"):
            pass
        assert set(t.get_step_timings()) == {"token_ms", "track_search_ms"}

    def test_send_to_posthog_step_events(self, mock_posthog_client):
        t = RequestTelemetry(pipeline="artwork")
        with t.track_step("token"):
            pass
        t.send_to_posthog(mock_posthog_client)

        step_call = mock_posthog_client.capture.call_args_list[0]
        assert step_call[1]["event"] == "artwork_token"
        assert step_call[1]["properties"]["step"] == "token"

    def test_send_to_posthog_summary_event(self, mock_posthog_client):
        t = RequestTelemetry(pipeline="song_search")
        t.record_api_call("qqmusic")
        t.send_to_posthog(mock_posthog_client, {"results_count": 3})

        summary = mock_posthog_client.capture.call_args_list[-1][1]
        assert summary["event"] == "song_search_completed"
        assert summary["properties"]["results_count"] == 3
        assert summary["properties"]["api_calls"]["qqmusic"] == 1
