from __future__ import annotations

import logging
import time
from typing import Any, Optional, Sequence, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from recipe_form.config import Settings
from recipe_form.core.form import build_generate_request
from recipe_form.core.models import ErrorPayload, GeneratedMeal, PantryAnalysis
from .exceptions import (
    EndpointNotFoundError,
    RecipeAPIError,
    ServerReportedError,
    TransportError,
    UnexpectedResponseError,
)

logger = logging.getLogger(__name__)

GENERATE_PATH = "/generate-meal"
ANALYZE_PATH = "/analyze-pantry"

NOT_FOUND_ALERT = "Backend endpoint not found. Please check if the server is running."
UNKNOWN_ERROR = "An unknown error occurred"
UNEXPECTED_ALERT = "An unexpected error occurred."
PANTRY_FAILED_ALERT = "Failed to analyze pantry image"
UPLOAD_FAILED_ALERT = "Failed to upload image. Please try again."

M = TypeVar("M", bound=BaseModel)


def _decode(resp: httpx.Response) -> Any:
    try:
        return resp.json()
    except ValueError:
        return resp.text or None


def _detail(payload: Any) -> Optional[str]:
    try:
        return ErrorPayload.model_validate(payload).detail or None
    except ValidationError:
        return None


class RecipeAPIClient:
    """
    Async client for the recipe backend. Every failure surfaces as a RecipeAPIError
    subclass; httpx exceptions never leave this class.
    """

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self._client = httpx.AsyncClient(
            base_url=settings.recipe_api_base_url,
            timeout=settings.recipe_api_timeout,
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def generate_recipe(self, description: str, restrictions: Sequence[str]) -> GeneratedMeal:
        body = build_generate_request(description, restrictions).payload()
        resp = await self._post(GENERATE_PATH, json=body)
        return self._parse(resp, GeneratedMeal)

    async def analyze_pantry(
        self,
        filename: str,
        content: bytes,
        content_type: Optional[str] = None,
    ) -> PantryAnalysis:
        files = {"file": (filename or "pantry", content, content_type or "application/octet-stream")}
        resp = await self._post(ANALYZE_PATH, files=files)
        return self._parse(resp, PantryAnalysis)

    # ---- internals -----------------------------------------------------------

    async def _post(self, path: str, **kwargs: Any) -> httpx.Response:
        t0 = time.perf_counter()
        try:
            resp = await self._client.post(path, **kwargs)
        except httpx.HTTPError as e:
            raise TransportError(f"POST {path} failed: {e}") from e
        dt_ms = (time.perf_counter() - t0) * 1000.0
        logger.info("POST %s -> %s in %.1f ms", path, resp.status_code, dt_ms)

        if resp.status_code == 404:
            payload = _decode(resp)
            raise EndpointNotFoundError(f"POST {path}: endpoint not found", status=404,
                                        detail=_detail(payload), payload=payload)
        if resp.is_error:
            payload = _decode(resp)
            raise ServerReportedError(f"POST {path}: HTTP {resp.status_code}", status=resp.status_code,
                                      detail=_detail(payload), payload=payload)
        return resp

    @staticmethod
    def _parse(resp: httpx.Response, model: Type[M]) -> M:
        payload = _decode(resp)
        try:
            return model.model_validate(payload)
        except ValidationError as e:
            raise UnexpectedResponseError(
                f"Unexpected {model.__name__} response: {e}",
                status=resp.status_code,
                payload=payload,
            ) from e


# ---- user-facing messages ----------------------------------------------------

def generation_alert(exc: RecipeAPIError) -> str:
    if isinstance(exc, EndpointNotFoundError):
        return NOT_FOUND_ALERT
    if isinstance(exc, UnexpectedResponseError):
        return UNEXPECTED_ALERT
    return f"Error: {exc.detail or UNKNOWN_ERROR}"


def pantry_alert(exc: RecipeAPIError) -> str:
    if isinstance(exc, UnexpectedResponseError):
        return UPLOAD_FAILED_ALERT
    return exc.detail or PANTRY_FAILED_ALERT


def log_pantry_failure(exc: RecipeAPIError) -> None:
    if isinstance(exc, UnexpectedResponseError):
        logger.error("Upload Error: %s", exc)
        return
    logger.error(
        "API Error: %s",
        {"message": exc.detail or str(exc), "status": exc.status, "data": exc.payload},
    )
