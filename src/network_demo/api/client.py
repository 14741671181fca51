"""
API Client Module

Configured HTTP client for the JSONPlaceholder API. Every request runs
through an ordered list of pipeline stages (authentication, then
diagnostics) and every failure is surfaced as a ClassifiedError.
"""

import logging
from pathlib import Path
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, TypeVar, Union

import httpx

from ..config import APIConfig, config
from ..storage.preferences import PreferenceStore
from ..storage.tokens import TokenStore
from .errors import ResponseParseError, classify
from .models import Post, User
from .request import ApiRequest
from .stages import AuthStage, LoggingStage, PipelineStage


logger = logging.getLogger(__name__)

T = TypeVar("T")


def _expect_list(data: Any) -> List[Any]:
    if not isinstance(data, list):
        raise ValueError(f"Expected a JSON array, got {type(data).__name__}")
    return data


def _expect_object(data: Any) -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object, got {type(data).__name__}")
    return data


class APIClient:
    """
    HTTP client for the JSONPlaceholder API.

    Features:
    - Fixed base URL and a single timeout for every phase
    - Bearer token injection, token cleared on 401
    - One error taxonomy for every failure (ClassifiedError)

    The client keeps no per-call state, so one instance can serve
    concurrent calls from several threads.
    """

    def __init__(
        self,
        api_config: Optional[APIConfig] = None,
        token_store: Optional[TokenStore] = None,
        stages: Optional[Iterable[PipelineStage]] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """
        Initialize the API client.

        Args:
            api_config: Client settings (a default APIConfig if None).
            token_store: Store holding the bearer token (the default
                preference file if None).
            stages: Pipeline stages, in order. Defaults to an AuthStage
                followed by a LoggingStage.
            transport: Optional httpx transport, e.g. httpx.MockTransport.
        """
        self.api_config = api_config or APIConfig()
        # Snapshot: later changes to the config's dict never reach this client
        self._default_headers = MappingProxyType(dict(self.api_config.default_headers))
        self.token_store = token_store or TokenStore(
            PreferenceStore(config.storage.preferences_path),
            key=config.storage.token_key,
        )

        if stages is None:
            stages = [AuthStage(self.token_store), LoggingStage()]
        self._stages = tuple(stages)

        self._http = httpx.Client(
            base_url=self.api_config.base_url,
            timeout=httpx.Timeout(self.api_config.timeout_seconds),
            transport=transport,
        )
        logger.info(f"APIClient initialized (base_url: {self.api_config.base_url})")

    @property
    def stages(self) -> tuple:
        return self._stages

    def close(self) -> None:
        """Close the underlying connection pool."""
        self._http.close()

    def __enter__(self) -> "APIClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def build_request(self, request: ApiRequest) -> httpx.Request:
        """
        Turn a request descriptor into an httpx.Request.

        Default headers are merged case-insensitively under the
        descriptor's own headers. Multipart requests leave Content-Type
        to httpx so the boundary is set correctly.
        """
        headers = httpx.Headers(dict(self._default_headers))
        if request.is_multipart:
            headers.pop("Content-Type", None)
        headers.update(request.headers)

        return self._http.build_request(
            request.method,
            request.path,
            params=dict(request.params) if request.params else None,
            json=request.json,
            files=dict(request.files) if request.files else None,
            headers=headers,
        )

    def send(self, request: ApiRequest) -> httpx.Response:
        """
        Send a request through the pipeline stages.

        Raises:
            httpx.HTTPStatusError: For any non-2xx response.
            httpx.RequestError: For transport failures.
        """
        try:
            for stage in self._stages:
                request = stage.before_send(request)

            response = self._http.send(self.build_request(request))
            if not response.is_success:
                response.raise_for_status()

        except Exception as e:
            for stage in self._stages:
                stage.on_failure(e)
            raise

        for stage in self._stages:
            response = stage.on_success(response)
        return response

    def _decode(self, response: httpx.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise ResponseParseError(f"Response body is not valid JSON: {e}") from e

    def call(
        self,
        request_builder: Callable[[], ApiRequest],
        parser: Callable[[Any], T],
        custom_error_message: Optional[str] = None,
    ) -> T:
        """
        Build, send and parse a request.

        Args:
            request_builder: Produces the request descriptor.
            parser: Converts the decoded JSON body into the result.
            custom_error_message: Message used for any failure.

        Returns:
            The parser's result.

        Raises:
            ClassifiedError: For any failure, including parser errors.
        """
        try:
            response = self.send(request_builder())
            body = self._decode(response)
            try:
                return parser(body)
            except Exception as e:
                raise ResponseParseError(f"Failed to parse response: {e}") from e
        except Exception as e:
            raise classify(e, custom_error_message) from e

    # Generic operations

    def get_list(
        self,
        path: str,
        item_parser: Callable[[Any], T],
        params: Optional[Mapping[str, Any]] = None,
        custom_error_message: Optional[str] = None,
    ) -> List[T]:
        """GET a collection and parse each element."""
        return self.call(
            lambda: ApiRequest("GET", path, params=params),
            lambda data: [item_parser(item) for item in _expect_list(data)],
            custom_error_message,
        )

    def get_one(
        self,
        path: str,
        parser: Callable[[Any], T],
        custom_error_message: Optional[str] = None,
    ) -> T:
        return self.call(lambda: ApiRequest("GET", path), parser, custom_error_message)

    def create(
        self,
        path: str,
        body: Mapping[str, Any],
        parser: Callable[[Any], T],
        custom_error_message: Optional[str] = None,
    ) -> T:
        return self.call(
            lambda: ApiRequest("POST", path, json=dict(body)),
            parser,
            custom_error_message,
        )

    def update(
        self,
        path: str,
        body: Mapping[str, Any],
        parser: Callable[[Any], T],
        custom_error_message: Optional[str] = None,
    ) -> T:
        return self.call(
            lambda: ApiRequest("PUT", path, json=dict(body)),
            parser,
            custom_error_message,
        )

    def delete(self, path: str, custom_error_message: Optional[str] = None) -> None:
        """DELETE a resource; the response body is discarded."""
        self.call(lambda: ApiRequest("DELETE", path), lambda _: None, custom_error_message)

    def upload(
        self,
        path: str,
        file_path: Union[str, Path],
        field_name: Optional[str] = None,
        custom_error_message: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        POST one file as multipart/form-data.

        Args:
            path: Upload endpoint.
            file_path: Local file to send.
            field_name: Form field carrying the file.
            custom_error_message: Message used for any failure.

        Returns:
            The JSON object returned by the server.
        """
        field_name = field_name or self.api_config.upload_field_name

        def build() -> ApiRequest:
            source = Path(file_path)
            return ApiRequest(
                "POST",
                path,
                files={field_name: (source.name, source.read_bytes())},
            )

        return self.call(build, _expect_object, custom_error_message)

    # JSONPlaceholder operations

    def fetch_users(self) -> List[User]:
        """Fetch every user."""
        return self.get_list(
            self.api_config.users_endpoint,
            User.from_json,
            custom_error_message="Could not load the user list",
        )

    def get_user(self, user_id: int) -> User:
        return self.get_one(
            f"{self.api_config.users_endpoint}/{user_id}",
            User.from_json,
            custom_error_message="Could not load user details",
        )

    def create_user(self, name: str, email: str) -> User:
        return self.create(
            self.api_config.users_endpoint,
            {"name": name, "email": email},
            User.from_json,
            custom_error_message="Could not create the user",
        )

    def update_user(self, user_id: int, name: str, email: str) -> User:
        return self.update(
            f"{self.api_config.users_endpoint}/{user_id}",
            {"name": name, "email": email},
            User.from_json,
            custom_error_message="Could not update the user",
        )

    def delete_user(self, user_id: int) -> None:
        self.delete(
            f"{self.api_config.users_endpoint}/{user_id}",
            custom_error_message="Could not delete the user",
        )

    def get_posts_by_user(self, user_id: int) -> List[Post]:
        """Fetch the posts written by one user."""
        return self.get_list(
            self.api_config.posts_endpoint,
            Post.from_json,
            params={"userId": user_id},
            custom_error_message="Could not load the user's posts",
        )

    def upload_file(self, file_path: Union[str, Path]) -> Dict[str, Any]:
        return self.upload(
            self.api_config.upload_endpoint,
            file_path,
            custom_error_message="Could not upload the file",
        )
