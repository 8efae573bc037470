"""Health check models and router factory.

Provides:

- **Response models**: ``HealthResponse``, ``CheckResult``, ``LivenessResponse``.
- **``HealthCheck``**: a declarative dependency check with ``required`` and
  ``timeout_s`` knobs.
- **``create_health_router()``**: ``/health``, ``/health/ready`` and
  ``/health/live`` for any FastAPI app.
- **``database_check()``**: a ``HealthCheck`` that pings an engine and
  verifies the seq-spine tables are provisioned.

Quick start::

    router = create_health_router(
        service_name="seq-spine",
        version="0.1.0",
        checks=[database_check(engine)],
    )
    app.include_router(router)
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, Literal

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from sqlalchemy import text
from sqlalchemy.engine import Engine

from seqspine.core.schema import SEQ_TABLES, existing_tables

_START_TIME = time.monotonic()

Status = Literal["healthy", "degraded", "unhealthy"]


class CheckResult(BaseModel):
    """Result of a single dependency health check."""

    status: Status
    latency_ms: float | None = None
    error: str | None = None
    details: dict[str, Any] = Field(default_factory=dict)


class HealthResponse(BaseModel):
    """Envelope of ``GET /health`` and ``GET /health/ready``."""

    status: Status = "healthy"
    service: str = ""
    version: str = ""
    uptime_s: float = Field(default_factory=lambda: round(time.monotonic() - _START_TIME, 1))
    timestamp: str = Field(default_factory=lambda: datetime.now(UTC).isoformat())
    checks: dict[str, CheckResult] = Field(default_factory=dict)


class LivenessResponse(BaseModel):
    status: str = "alive"


@dataclass
class HealthCheck:
    """Declarative description of a single dependency check.

    ``check_fn`` returns ``True`` or raises.  A failing ``required`` check
    makes the service ``unhealthy``; an optional one only ``degraded``.
    """

    name: str
    check_fn: Callable[[], Awaitable[bool]]
    required: bool = True
    timeout_s: float = 5.0


def database_check(engine: Engine, *, timeout_s: float = 5.0) -> HealthCheck:
    """Ping *engine* and require both seq-spine tables to exist."""

    def _ping() -> bool:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        missing = set(SEQ_TABLES.values()) - existing_tables(engine)
        if missing:
            raise RuntimeError(f"tables not provisioned: {sorted(missing)}")
        return True

    async def _check() -> bool:
        return await asyncio.to_thread(_ping)

    return HealthCheck("database", _check, required=True, timeout_s=timeout_s)


async def _probe(check: HealthCheck) -> CheckResult:
    started = time.monotonic()
    try:
        await asyncio.wait_for(check.check_fn(), timeout=check.timeout_s)
    except TimeoutError:
        return CheckResult(status="unhealthy", error=f"no answer within {check.timeout_s}s")
    except Exception as exc:  # noqa: BLE001
        return CheckResult(
            status="unhealthy",
            latency_ms=_ms_since(started),
            error=str(exc)[:200],
        )
    return CheckResult(status="healthy", latency_ms=_ms_since(started))


def _ms_since(started: float) -> float:
    return round((time.monotonic() - started) * 1000, 2)


def overall_status(results: dict[str, CheckResult], checks: list[HealthCheck]) -> Status:
    """``unhealthy`` if a required check failed, ``degraded`` if only optional ones did."""
    failed = {name for name, result in results.items() if result.status != "healthy"}
    if any(check.required and check.name in failed for check in checks):
        return "unhealthy"
    return "degraded" if failed else "healthy"


def create_health_router(
    service_name: str,
    version: str,
    checks: list[HealthCheck] | None = None,
    prefix: str = "/health",
) -> APIRouter:
    """``GET {prefix}``, ``{prefix}/ready`` (503 unless healthy) and ``{prefix}/live``.

    ``{prefix}`` answers 503 only when a required check fails.
    """
    router = APIRouter(tags=["health"])
    registered = list(checks or [])

    async def evaluate(*, strict: bool) -> JSONResponse:
        probes = await asyncio.gather(*(_probe(check) for check in registered))
        results = {check.name: probe for check, probe in zip(registered, probes, strict=True)}
        status = overall_status(results, registered)
        failing = status != "healthy" if strict else status == "unhealthy"
        body = HealthResponse(status=status, service=service_name, version=version, checks=results)
        return JSONResponse(content=body.model_dump(), status_code=503 if failing else 200)

    @router.get(prefix, response_model=HealthResponse)
    async def health() -> JSONResponse:
        return await evaluate(strict=False)

    @router.get(f"{prefix}/ready", response_model=HealthResponse)
    async def ready() -> JSONResponse:
        return await evaluate(strict=True)

    @router.get(f"{prefix}/live", response_model=LivenessResponse)
    async def live() -> LivenessResponse:
        return LivenessResponse()

    return router


__all__ = [
    "CheckResult",
    "HealthResponse",
    "LivenessResponse",
    "HealthCheck",
    "database_check",
    "overall_status",
    "create_health_router",
]
