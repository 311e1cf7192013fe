"""Global error handlers mapping failures onto the API error taxonomy.

Every error body has ``detail`` (machine reason), ``message`` (safe for
display) and ``request_id``. Unexpected exceptions become a generic 500; the
cause is only logged.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from srecconnect.api.request_id import get_request_id
from srecconnect.domain.errors import DomainError

logger = logging.getLogger(__name__)


def _body(request: Request, detail: str, message: str) -> dict:
	return {"detail": detail, "message": message, "request_id": get_request_id(request)}


def install_error_handlers(app: FastAPI) -> None:
	@app.exception_handler(DomainError)
	async def domain_exc_handler(request: Request, exc: DomainError):  # type: ignore[override]
		if exc.status_code >= 500:
			logger.error("domain_error", extra={"reason": exc.reason}, exc_info=exc)
		return JSONResponse(status_code=exc.status_code, content=_body(request, exc.reason, exc.message))

	@app.exception_handler(StarletteHTTPException)
	async def http_exc_handler(request: Request, exc: StarletteHTTPException):  # type: ignore[override]
		detail = exc.detail if isinstance(exc.detail, str) else "http_error"
		return JSONResponse(
			status_code=exc.status_code,
			content=_body(request, detail, detail),
			headers=getattr(exc, "headers", None),
		)

	@app.exception_handler(RequestValidationError)
	async def validation_exc_handler(request: Request, exc: RequestValidationError):  # type: ignore[override]
		errors = exc.errors()
		first = errors[0] if errors else {}
		field = ".".join(str(part) for part in first.get("loc", ())[1:]) or "body"
		message = f"{field}: {first.get('msg', 'invalid value')}"
		payload = _body(request, "validation_error", message)
		payload["errors"] = [
			{"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")}
			for err in errors
		]
		return JSONResponse(status_code=400, content=payload)

	@app.exception_handler(Exception)
	async def unhandled_exc_handler(request: Request, exc: Exception):  # type: ignore[override]
		logger.error("unhandled_error", extra={"path": request.url.path}, exc_info=exc)
		return JSONResponse(status_code=500, content=_body(request, "internal_error", "Internal server error"))
