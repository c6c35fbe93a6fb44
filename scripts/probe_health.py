"""Periodic liveness probe for the REST and live-session endpoints.

Meant to run from cron or a systemd timer; exits non-zero when any check
fails so the scheduler can alert.

    python -m scripts.probe_health --base-url https://docs.example.com
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from dataclasses import dataclass

import httpx

from app.core.logging import configure_logging
from app.utils.http import RetryConfig, request_with_retry

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_PROBE_FAILED = 4

PROBE_PATHS = ("/api/health", "/live/health")


@dataclass(slots=True)
class ProbeResult:
    path: str
    ok: bool
    detail: str


async def probe(
    client: httpx.AsyncClient, *, retry_config: RetryConfig | None = None
) -> list[ProbeResult]:
    """Hit every health endpoint once (with retries) and report the outcome."""
    results: list[ProbeResult] = []
    for path in PROBE_PATHS:
        try:
            response = await request_with_retry(
                client.get, path, retry_config=retry_config
            )
            payload = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("Probe failed path=%s error=%s", path, exc)
            results.append(ProbeResult(path=path, ok=False, detail=str(exc)))
            continue

        status = payload.get("status")
        ok = status == "ok"
        detail = f"status={status}"
        if "activeRooms" in payload:
            detail += (
                f" rooms={payload['activeRooms']}"
                f" connections={payload.get('totalConnections', 0)}"
            )
        log = logger.info if ok else logger.error
        log("Probe path=%s %s", path, detail)
        results.append(ProbeResult(path=path, ok=ok, detail=detail))
    return results


async def _run(base_url: str, timeout: float, attempts: int) -> int:
    retry_config = RetryConfig(attempts=attempts, backoff_seconds=1.0)
    async with httpx.AsyncClient(base_url=base_url, timeout=timeout) as client:
        results = await probe(client, retry_config=retry_config)
    if all(result.ok for result in results):
        logger.info("All monitoring checks passed.")
        return EXIT_OK
    logger.error("One or more monitoring checks failed.")
    return EXIT_PROBE_FAILED


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Probe service health endpoints.")
    parser.add_argument("--base-url", default="http://localhost:8080")
    parser.add_argument("--timeout", type=float, default=5.0)
    parser.add_argument("--attempts", type=int, default=2)
    args = parser.parse_args(argv)

    configure_logging()
    return asyncio.run(_run(args.base_url, args.timeout, args.attempts))


if __name__ == "__main__":  # pragma: no cover - script entry point
    sys.exit(main())
