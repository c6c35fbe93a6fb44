"""In-process counters for HTTP traffic and live-connection authorization."""

from __future__ import annotations

import threading
from collections import Counter
from typing import Any, Dict, Tuple

DURATION_BUCKETS_MS: Tuple[int, ...] = (5, 10, 25, 50, 100, 250, 500, 1000, 2500, 5000)


class SessionMetrics:
    """Thread-safe counters exposed as a JSON snapshot."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._requests: Counter[Tuple[str, str, int]] = Counter()
        self._errors: Counter[Tuple[str, str, int]] = Counter()
        self._duration_buckets: Counter[Tuple[str, str, str]] = Counter()
        self._duration_sum_ms: Counter[Tuple[str, str]] = Counter()
        self._auth_outcomes: Counter[Tuple[str, str]] = Counter()
        self._active_sockets = 0

    def observe_request(
        self, *, method: str, route: str, status_code: int, duration_ms: float
    ) -> None:
        bucket = next(
            (str(edge) for edge in DURATION_BUCKETS_MS if duration_ms <= edge), "+Inf"
        )
        with self._lock:
            self._requests[(method, route, status_code)] += 1
            if status_code >= 400:
                self._errors[(method, route, status_code)] += 1
            self._duration_buckets[(method, route, bucket)] += 1
            self._duration_sum_ms[(method, route)] += duration_ms

    def record_auth(self, *, outcome: str, label: str) -> None:
        """Count an authorization outcome, labelled by method or rejection reason."""
        with self._lock:
            self._auth_outcomes[(outcome, label)] += 1

    def socket_opened(self) -> None:
        with self._lock:
            self._active_sockets += 1

    def socket_closed(self) -> None:
        with self._lock:
            self._active_sockets = max(0, self._active_sockets - 1)

    def snapshot(self) -> Dict[str, Any]:
        with self._lock:
            return {
                "http_requests_total": [
                    {"method": m, "route": r, "status_code": s, "value": v}
                    for (m, r, s), v in sorted(self._requests.items())
                ],
                "http_errors_total": [
                    {"method": m, "route": r, "status_code": s, "value": v}
                    for (m, r, s), v in sorted(self._errors.items())
                ],
                "http_request_duration_ms": [
                    {"method": m, "route": r, "le": b, "value": v}
                    for (m, r, b), v in sorted(self._duration_buckets.items())
                ],
                "http_request_duration_ms_sum": [
                    {"method": m, "route": r, "value": round(v, 3)}
                    for (m, r), v in sorted(self._duration_sum_ms.items())
                ],
                "live_auth_total": [
                    {"outcome": o, "label": label, "value": v}
                    for (o, label), v in sorted(self._auth_outcomes.items())
                ],
                "active_websockets": self._active_sockets,
            }


__all__ = ["DURATION_BUCKETS_MS", "SessionMetrics"]
