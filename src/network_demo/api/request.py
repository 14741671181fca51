"""
Request Descriptor

Immutable description of a single API request. Pipeline stages get a
descriptor and return a (possibly new) descriptor; they never mutate it.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Mapping, Optional, Tuple


@dataclass(frozen=True)
class ApiRequest:
    """
    A request relative to the client's base URL.

    Attributes:
        method: HTTP method (GET, POST, PUT, DELETE).
        path: Path relative to the base URL, e.g. "/users/7".
        params: Optional query parameters.
        json: Optional JSON body.
        headers: Extra headers merged over the client defaults.
        files: Optional multipart files, as {field: (filename, bytes)}.
    """
    method: str
    path: str
    params: Optional[Mapping[str, Any]] = None
    json: Any = None
    headers: Mapping[str, str] = field(default_factory=dict)
    files: Optional[Mapping[str, Tuple[str, bytes]]] = None

    def with_header(self, name: str, value: str) -> "ApiRequest":
        """Return a copy of this request with one header set (case-insensitive)."""
        headers: Dict[str, str] = {
            key: existing
            for key, existing in self.headers.items()
            if key.lower() != name.lower()
        }
        headers[name] = value
        return replace(self, headers=headers)

    @property
    def is_multipart(self) -> bool:
        return bool(self.files)
