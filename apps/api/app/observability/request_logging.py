import logging
from time import perf_counter

from fastapi import Request, Response
from starlette.middleware.base import RequestResponseEndpoint

logger = logging.getLogger("spotted.http")

UNMATCHED_PATH = "<unmatched>"


def _route_path(request: Request) -> str:
    # Capability tokens travel in paths; only the matched route template is logged.
    route = request.scope.get("route")
    if route is None:
        return UNMATCHED_PATH
    template = getattr(route, "path_format", None) or getattr(route, "path", None)
    return str(template) if template else UNMATCHED_PATH


def _log_request(request: Request, *, status: int, started_at: float, failed: bool) -> None:
    latency_ms = (perf_counter() - started_at) * 1000
    logger.info(
        "http_request",
        extra={
            "event_name": "http_request",
            "method": request.method,
            "path": _route_path(request),
            "status": status,
            "latency_ms": round(latency_ms, 2),
        },
        exc_info=failed,
    )


async def request_logging_middleware(
    request: Request, call_next: RequestResponseEndpoint
) -> Response:
    started_at = perf_counter()
    try:
        response = await call_next(request)
    except Exception:
        _log_request(request, status=500, started_at=started_at, failed=True)
        raise

    _log_request(request, status=response.status_code, started_at=started_at, failed=False)
    return response
