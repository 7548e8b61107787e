"""Gist page and file data models."""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class Page:
    """A gist hosted on GitHub, as listed by the API or read from the cache.

    Pages are replaced wholesale, never mutated in place.

    Attributes:
        user: Owner login
        id: Gist ID (unique, also the local mirror directory name)
        description: Gist description (may be empty)
        url: Canonical gist URL, used as the git remote
        public: Whether the gist is public
        created_at: Creation timestamp (timezone-aware)
        updated_at: Last update timestamp (timezone-aware)
        files: File names in the order the API declares them
    """
    user: str
    id: str
    description: str
    url: str
    public: bool
    created_at: datetime
    updated_at: datetime
    files: Tuple[str, ...]

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the flat cache record."""
        return {
            "user": self.user,
            "id": self.id,
            "description": self.description,
            "url": self.url,
            "public": self.public,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
            "files": list(self.files),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Page":
        """Build a Page from a cache record.

        Raises:
            KeyError: If a field is missing
            TypeError: If a field has the wrong type
            ValueError: If a timestamp cannot be parsed
        """
        files = data["files"]
        if not isinstance(files, list) or not all(isinstance(f, str) for f in files):
            raise TypeError("files must be a list of strings")
        for key in ("user", "id", "description", "url"):
            if not isinstance(data[key], str):
                raise TypeError(f"{key} must be a string")
        if not isinstance(data["public"], bool):
            raise TypeError("public must be a boolean")

        return cls(
            user=data["user"],
            id=data["id"],
            description=data["description"],
            url=data["url"],
            public=data["public"],
            created_at=parse_timestamp(data["created_at"]),
            updated_at=parse_timestamp(data["updated_at"]),
            files=tuple(files),
        )


@dataclass(frozen=True)
class File:
    """A single file of a gist, materialized from its local mirror.

    Attributes:
        name: File name as declared by the gist
        content: Text read from disk ("" if unreadable)
        full_path: Absolute path inside the mirror directory
        page: Owning gist (lookup only)
    """
    name: str
    content: str
    full_path: str
    page: Page


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO 8601 timestamp as produced by GitHub or Page.to_dict()."""
    if not isinstance(value, str):
        raise TypeError(f"timestamp must be a string, got {type(value).__name__}")
    # GitHub uses a trailing Z for UTC
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
