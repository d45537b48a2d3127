"""Custom exception classes and FastAPI exception handlers."""
from __future__ import annotations

from typing import Any

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.requests import Request


class AppError(Exception):
    """Base application error."""

    def __init__(self, detail: str, status_code: int = 500) -> None:
        self.detail = detail
        self.status_code = status_code
        super().__init__(detail)

    def to_body(self) -> dict[str, Any]:
        return {"ok": False, "message": self.detail}


class ValidationError(AppError):
    """Validation error (400) carrying a structured issue list."""

    def __init__(
        self,
        detail: str = "Validation failed",
        issues: list[dict[str, Any]] | None = None,
    ) -> None:
        super().__init__(detail=detail, status_code=400)
        self.issues = issues or []

    def to_body(self) -> dict[str, Any]:
        body = super().to_body()
        body["issues"] = self.issues
        return body


class MetadataProvidedError(AppError):
    """Client sent server-owned ``metadata`` (400)."""

    def __init__(
        self,
        detail: str = (
            "Do not send 'metadata' in the request body. "
            "Metadata is server-generated."
        ),
    ) -> None:
        super().__init__(detail=detail, status_code=400)


class NameMismatchError(AppError):
    """URL service name differs from ``body.name`` (400)."""

    def __init__(
        self, detail: str = "Service name in URL must match body.name"
    ) -> None:
        super().__init__(detail=detail, status_code=400)


class NotFoundError(AppError):
    """Resource not found (404)."""

    def __init__(self, detail: str = "Not found") -> None:
        super().__init__(detail=detail, status_code=404)


class ConflictError(AppError):
    """Conflict error (409)."""

    def __init__(self, detail: str = "Conflict") -> None:
        super().__init__(detail=detail, status_code=409)


class MetadataFetchError(AppError):
    """Remote service metadata could not be fetched or was malformed (502)."""

    def __init__(self, detail: str = "Metadata fetch failed") -> None:
        super().__init__(detail=detail, status_code=502)


def register_exception_handlers(app: FastAPI) -> None:
    """Register custom exception handlers with a FastAPI app."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.to_body(),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        issues = [
            {
                "loc": list(err.get("loc", ())),
                "msg": err.get("msg", ""),
                "type": err.get("type", ""),
            }
            for err in exc.errors()
        ]
        return JSONResponse(
            status_code=400,
            content={"ok": False, "message": "Validation failed", "issues": issues},
        )
