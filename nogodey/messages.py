"""Canonical message records extracted from the JS build."""

from dataclasses import dataclass, field
from typing import Dict, Any


@dataclass(frozen=True)
class Location:
    """Source position of an extracted string."""
    line: int = 0
    column: int = 0


@dataclass(frozen=True)
class Message:
    """
    A single extracted UI string.

    Mirrors the objects in js/dist/messages.json:
    {"key": ..., "default": ..., "file": ..., "loc": {"line": ..., "column": ...}}
    """
    key: str
    default: str
    file: str = ""
    loc: Location = field(default_factory=Location)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Message":
        """
        Build a Message from a decoded JSON object.

        Args:
            data: One entry of the messages.json array

        Returns:
            Message instance

        Raises:
            ValueError: If the entry is not an object or key/default are not strings
        """
        if not isinstance(data, dict):
            raise ValueError(f"message entry must be an object, got {type(data).__name__}")

        key = data.get("key")
        default = data.get("default", "")
        if not isinstance(key, str):
            raise ValueError("message entry missing string field: key")
        if not isinstance(default, str):
            raise ValueError(f"message '{key}' has non-string default")

        loc = data.get("loc") or {}
        if not isinstance(loc, dict):
            raise ValueError(f"message '{key}' has invalid loc")

        return cls(
            key=key,
            default=default,
            file=str(data.get("file", "")),
            loc=Location(
                line=int(loc.get("line", 0)),
                column=int(loc.get("column", 0))
            )
        )

    def to_dict(self) -> Dict[str, Any]:
        """Return the messages.json representation."""
        return {
            "key": self.key,
            "default": self.default,
            "file": self.file,
            "loc": {"line": self.loc.line, "column": self.loc.column},
        }
