"""
Lightweight Prometheus-compatible request metrics.

Tracks request counts, response times and error rates per route, with
per-model paths folded into a single {shortId} series.
"""

import time
from collections import defaultdict
from typing import Any

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

METRIC_PREFIX = "showcase"
MODELS_PATH = "/api/models/"


def normalize_path(path: str) -> str:
    """Replace the short identifier in /api/models/<shortId>[/...] paths."""
    if not path.startswith(MODELS_PATH):
        return path
    rest = path[len(MODELS_PATH):]
    if not rest:
        return path
    _, sep, tail = rest.partition("/")
    return f"{MODELS_PATH}{{shortId}}{sep}{tail}"


class MetricsCollector:
    """In-process collector, exported as JSON or Prometheus text."""

    def __init__(self) -> None:
        self._request_count: dict[str, int] = defaultdict(int)
        self._error_count: dict[str, int] = defaultdict(int)
        self._response_time_sum: dict[str, float] = defaultdict(float)
        self._status_counts: dict[int, int] = defaultdict(int)
        self._start_time: float = time.time()

    def record_request(
        self,
        method: str,
        path: str,
        status_code: int,
        duration: float,
    ) -> None:
        key = f"{method} {path}"
        self._request_count[key] += 1
        self._response_time_sum[key] += duration
        self._status_counts[status_code] += 1

        if status_code >= 400:
            self._error_count[key] += 1

    def get_metrics(self) -> dict[str, Any]:
        """Get metrics as a structured dictionary."""
        total_requests = sum(self._request_count.values())
        total_errors = sum(self._error_count.values())

        return {
            "uptime_seconds": round(time.time() - self._start_time, 2),
            "total_requests": total_requests,
            "total_errors": total_errors,
            "error_rate": round(total_errors / total_requests, 4) if total_requests else 0,
            "requests_by_endpoint": dict(self._request_count),
            "errors_by_endpoint": dict(self._error_count),
            "status_code_counts": {str(k): v for k, v in sorted(self._status_counts.items())},
            "avg_response_time_ms": {
                k: round(self._response_time_sum[k] / n * 1000, 2)
                for k, n in self._request_count.items()
            },
        }

    def to_prometheus(self, gauges: dict[str, tuple[str, float]] | None = None) -> str:
        """
        Export metrics in Prometheus text exposition format.

        Args:
            gauges: Extra gauges as {name: (help text, value)}
        """
        p = METRIC_PREFIX
        lines: list[str] = [
            f"# HELP {p}_uptime_seconds Time since service start in seconds",
            f"# TYPE {p}_uptime_seconds gauge",
            f"{p}_uptime_seconds {time.time() - self._start_time:.2f}",
            "",
        ]

        def labelled(name: str, help_text: str, kind: str, series: dict[str, float], fmt: str):
            lines.append(f"# HELP {p}_{name} {help_text}")
            lines.append(f"# TYPE {p}_{name} {kind}")
            for key in sorted(series):
                method, path = key.split(" ", 1)
                value = format(series[key], fmt)
                lines.append(f'{p}_{name}{{method="{method}",path="{path}"}} {value}')
            lines.append("")

        labelled("http_requests_total", "Total HTTP requests", "counter", self._request_count, "d")
        labelled("http_errors_total", "Total HTTP errors (4xx/5xx)", "counter", self._error_count, "d")

        lines.append(f"# HELP {p}_http_status_total HTTP responses by status code")
        lines.append(f"# TYPE {p}_http_status_total counter")
        for code, count in sorted(self._status_counts.items()):
            lines.append(f'{p}_http_status_total{{code="{code}"}} {count}')
        lines.append("")

        averages = {
            k: self._response_time_sum[k] / n for k, n in self._request_count.items()
        }
        labelled(
            "http_response_time_seconds",
            "Average response time in seconds",
            "gauge",
            averages,
            ".6f",
        )

        for name, (help_text, value) in (gauges or {}).items():
            lines.append(f"# HELP {p}_{name} {help_text}")
            lines.append(f"# TYPE {p}_{name} gauge")
            lines.append(f"{p}_{name} {value}")
            lines.append("")

        return "\n".join(lines) + "\n"


class MetricsMiddleware(BaseHTTPMiddleware):
    """Records duration and status code of every request."""

    def __init__(self, app, collector: MetricsCollector):
        super().__init__(app)
        self.collector = collector

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        # Scrapes of the metrics endpoints are not counted
        if "/metrics" in request.url.path:
            return await call_next(request)

        start = time.perf_counter()
        response = await call_next(request)
        duration = time.perf_counter() - start

        self.collector.record_request(
            method=request.method,
            path=normalize_path(request.url.path),
            status_code=response.status_code,
            duration=duration,
        )
        return response


def get_metrics_collector(request: Request) -> MetricsCollector:
    """Dependency returning the application's collector."""
    return request.app.state.metrics
