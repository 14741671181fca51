"""
Pipeline Stages Module

Request/response/error stages applied around every request issued by
the APIClient. Stages run in list order for each hook.
"""

import logging
from typing import Mapping

import httpx

from .request import ApiRequest
from ..storage.tokens import TokenStore


logger = logging.getLogger(__name__)


class PipelineStage:
    """
    Base class for a pipeline stage.

    Every hook is a pass-through by default, so a stage only overrides
    the hooks it cares about.
    """

    def before_send(self, request: ApiRequest) -> ApiRequest:
        """Called before the request is sent; returns the request to send."""
        return request

    def on_success(self, response: httpx.Response) -> httpx.Response:
        """Called with every 2xx response."""
        return response

    def on_failure(self, error: Exception) -> None:
        """Called with the raw failure before it is classified."""


class AuthStage(PipelineStage):
    """
    Injects the bearer token and reacts to authorization failures.

    On 401 the stored token is cleared and the failure propagates
    unchanged; the caller decides what to do next (e.g. log in again).
    The request is never retried here.
    """

    def __init__(self, token_store: TokenStore):
        """
        Initialize the auth stage.

        Args:
            token_store: Store holding the bearer token.
        """
        self.token_store = token_store

    def before_send(self, request: ApiRequest) -> ApiRequest:
        token = self.token_store.get()
        if token:
            logger.debug("Attaching bearer token to request")
            return request.with_header("Authorization", f"Bearer {token}")

        logger.debug("No token stored, sending request unauthenticated")
        return request

    def on_success(self, response: httpx.Response) -> httpx.Response:
        # A refreshed token found in the response would be saved here
        return response

    def on_failure(self, error: Exception) -> None:
        if (
            isinstance(error, httpx.HTTPStatusError)
            and error.response.status_code == 401
        ):
            logger.warning("401 Unauthorized received, clearing stored token")
            self.token_store.clear()


def _mask_headers(headers: Mapping[str, str]) -> dict:
    masked = {}
    for name, value in headers.items():
        if name.lower() == "authorization" and len(value) > 16:
            value = f"{value[:16]}..."
        masked[name] = value
    return masked


class LoggingStage(PipelineStage):
    """Diagnostic stage logging requests, responses and errors."""

    def __init__(self, max_body_chars: int = 500):
        self.max_body_chars = max_body_chars

    def _clip(self, text: str) -> str:
        if len(text) > self.max_body_chars:
            return f"{text[:self.max_body_chars]}... ({len(text)} chars)"
        return text

    def before_send(self, request: ApiRequest) -> ApiRequest:
        logger.debug(f"--> {request.method} {request.path}")
        if request.params:
            logger.debug(f"    params: {dict(request.params)}")
        logger.debug(f"    headers: {_mask_headers(request.headers)}")
        if request.json is not None:
            logger.debug(f"    body: {self._clip(repr(request.json))}")
        if request.files:
            names = {field: upload[0] for field, upload in request.files.items()}
            logger.debug(f"    files: {names}")
        return request

    def on_success(self, response: httpx.Response) -> httpx.Response:
        logger.debug(f"<-- {response.status_code} {response.request.method} {response.request.url}")
        logger.debug(f"    headers: {dict(response.headers)}")
        logger.debug(f"    body: {self._clip(response.text)}")
        return response

    def on_failure(self, error: Exception) -> None:
        if isinstance(error, httpx.HTTPStatusError):
            logger.debug(
                f"<-- {error.response.status_code} {error.request.method} {error.request.url}"
            )
            logger.debug(f"    body: {self._clip(error.response.text)}")
        else:
            logger.debug(f"<-- {type(error).__name__}: {error}")
