"""Data models for the store module."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

__all__ = ["ScriptRecord", "DEFAULT_SCRIPT", "DEFAULT_LABEL"]

DEFAULT_SCRIPT = "default_script.py"
DEFAULT_LABEL  = "init description"


def _utcnow() -> datetime:
    return datetime.now(tz=timezone.utc)


@dataclass
class ScriptRecord:
    """
    One entry of the script registry.

    Fields
    ──────
    id         — numeric identifier, neither unique nor sequential
    label      — human-readable description shown in the list
    target     — filename of the script handed to the interpreter
    created_at — UTC timestamp of creation

    Nothing is validated here; ``target`` is only checked for existence
    when the script is executed.
    """
    id:         int
    label:      str
    target:     str
    created_at: datetime = field(default_factory=_utcnow)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-serialisable form written to the registry file."""
        return {
            "id":         self.id,
            "label":      self.label,
            "target":     self.target,
            "created_at": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ScriptRecord":
        """
        Build a record from its stored form.

        Raises:
            KeyError:   a field is missing.
            TypeError:  a field has the wrong type.
            ValueError: ``created_at`` is not an ISO-8601 timestamp.
        """
        rec_id = data["id"]
        if isinstance(rec_id, bool) or not isinstance(rec_id, int):
            raise TypeError(f"id must be an integer, got {rec_id!r}")
        label, target, created = data["label"], data["target"], data["created_at"]
        for name, value in (("label", label), ("target", target), ("created_at", created)):
            if not isinstance(value, str):
                raise TypeError(f"{name} must be a string, got {value!r}")

        created_at = datetime.fromisoformat(created.replace("Z", "+00:00"))
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)
        return cls(id=rec_id, label=label, target=target, created_at=created_at)

    def __str__(self) -> str:
        return f"ScriptRecord(id={self.id}, label={self.label!r}, target={self.target!r})"
