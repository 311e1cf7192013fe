"""Per-request timing, Prometheus observations and one ``http_request`` log line."""

from __future__ import annotations

import time

from fastapi import FastAPI, Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from srecconnect.obs import logging as obs_logging
from srecconnect.obs import metrics

_logger = obs_logging.get_logger("srecconnect.http")


def route_label(request: Request) -> str:
	"""Path template of the matched route, so ids do not explode label cardinality."""
	route = request.scope.get("route")
	return getattr(route, "path", None) or "unmatched"


class ObservabilityMiddleware(BaseHTTPMiddleware):
	async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
		client = request.client
		token = obs_logging.bind_context(
			route=request.url.path,
			client_ip=client.host if client else None,
		)
		started = time.perf_counter()
		status_code = 500
		try:
			response = await call_next(request)
			status_code = response.status_code
			return response
		except Exception:
			_logger.exception("http_request_error", extra={"method": request.method})
			raise
		finally:
			elapsed = time.perf_counter() - started
			label = route_label(request)
			metrics.observe_request(label, request.method, status_code, elapsed)
			_logger.info(
				"http_request",
				extra={
					"method": request.method,
					"route_template": label,
					"status": status_code,
					"latency_ms": round(elapsed * 1000, 3),
				},
			)
			obs_logging.reset_context(token)


def install(app: FastAPI) -> None:
	app.add_middleware(ObservabilityMiddleware)
