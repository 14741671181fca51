"""
Domain Models

Flat records returned by the API client. Every field is required;
`from_json` rejects missing or mistyped values with ValueError.
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict


def _require(data: Any, key: str, expected: type) -> Any:
    """Fetch a required field from a JSON object and check its type."""
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object, got {type(data).__name__}")
    if key not in data:
        raise ValueError(f"Missing required field '{key}'")

    value = data[key]
    # bool is a subclass of int, but never a valid id
    if isinstance(value, bool) or not isinstance(value, expected):
        raise ValueError(
            f"Field '{key}' must be {expected.__name__}, got {type(value).__name__}"
        )
    return value


@dataclass(frozen=True)
class Post:
    """Represents a post from the API."""
    id: int
    title: str
    body: str

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "Post":
        """Build a Post by mapping each field by hand."""
        return cls(
            id=_require(data, "id", int),
            title=_require(data, "title", str),
            body=_require(data, "body", str),
        )

    def to_json(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "body": self.body,
        }


@dataclass(frozen=True)
class User:
    """Represents a user from the API."""
    id: int
    name: str
    email: str

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "User":
        """Build a User from the dataclass field list."""
        values = {}
        for name, field_type in (("id", int), ("name", str), ("email", str)):
            values[name] = _require(data, name, field_type)
        return cls(**values)

    def to_json(self) -> Dict[str, Any]:
        return asdict(self)
