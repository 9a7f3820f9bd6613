"""Telemetry module for tracking pipeline performance with PostHog."""

import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any

from posthog import Posthog

logger = logging.getLogger(__name__)

DISTINCT_ID = "song-artwork-proxy-service"

UPSTREAM_SERVICES = ("spotify", "qqmusic")


@dataclass
class StepResult:
    """Result of a tracked step."""

    duration_ms: float
    success: bool = True
    error_type: str | None = None


@dataclass
class RequestTelemetry:
    """Tracks performance metrics for a single pipeline invocation.

    Attributes:
        pipeline: Pipeline name used as the PostHog event prefix
            ("artwork" or "song_search").
    """

    pipeline: str = "request"
    steps: dict[str, StepResult] = field(default_factory=dict)
    api_calls: dict[str, int] = field(
        default_factory=lambda: {service: 0 for service in UPSTREAM_SERVICES}
    )
    start_time: float = field(default_factory=time.perf_counter)

    @contextmanager
    def track_step(self, step_name: str):
        """Context manager to time a step.

        Repeated steps with the same name (one per lyrics call, say) accumulate
        their durations into a single entry.

        Args:
            step_name: Name of the step being tracked

        Yields:
            None
        """
        step_start = time.perf_counter()
        error_type = None

        try:
            yield
        except Exception as e:
            error_type = type(e).__name__
            raise
        finally:
            duration_ms = (time.perf_counter() - step_start) * 1000
            previous = self.steps.get(step_name)
            if previous is not None:
                duration_ms += previous.duration_ms
                if error_type is None and not previous.success:
                    error_type = previous.error_type
            self.steps[step_name] = StepResult(
                duration_ms=duration_ms,
                success=error_type is None,
                error_type=error_type,
            )

    def record_api_call(self, service: str) -> None:
        """Increment API call counter for an upstream service.

        Args:
            service: Name of the service ("spotify" or "qqmusic")
        """
        if service in self.api_calls:
            self.api_calls[service] += 1
        else:
            logger.warning(f"Unknown service for API call tracking: {service}")

    def get_total_duration_ms(self) -> float:
        """Get total elapsed time since telemetry was created."""
        return (time.perf_counter() - self.start_time) * 1000

    def get_step_timings(self) -> dict[str, float]:
        """Get timing for each step in milliseconds."""
        return {f"{name}_ms": step.duration_ms for name, step in self.steps.items()}

    def send_to_posthog(
        self,
        posthog_client: Posthog,
        extra_properties: dict[str, Any] | None = None,
    ) -> None:
        """Send all telemetry events to PostHog.

        Args:
            posthog_client: PostHog client instance
            extra_properties: Additional properties to include in the completed event
        """
        extra_properties = extra_properties or {}

        for step_name, step_result in self.steps.items():
            posthog_client.capture(
                distinct_id=DISTINCT_ID,
                event=f"{self.pipeline}_{step_name}",
                properties={
                    "step": step_name,
                    "duration_ms": round(step_result.duration_ms, 2),
                    "success": step_result.success,
                    "error_type": step_result.error_type,
                },
            )

        posthog_client.capture(
            distinct_id=DISTINCT_ID,
            event=f"{self.pipeline}_completed",
            properties={
                "total_duration_ms": round(self.get_total_duration_ms(), 2),
                "steps": self.get_step_timings(),
                "api_calls": self.api_calls.copy(),
                **extra_properties,
            },
        )

        logger.debug(
            f"Sent telemetry: {len(self.steps)} steps, total {self.get_total_duration_ms():.1f}ms"
        )
