"""
Write-once cache for the artifacts derived from a document.

Each key is in one of three states: not computed, computed with a value, or
computed but empty. Keeping "empty" as its own state separates an article
with no extractable body from one that has not been looked at yet.
"""

from __future__ import annotations

from dataclasses import dataclass
import enum
from typing import Any

BODY_SNAPSHOT = "body-snapshot"
CONTENT = "content"
TITLE = "title"
TEXT_BODY = "text-body"

ARTIFACT_KEYS = (BODY_SNAPSHOT, CONTENT, TITLE, TEXT_BODY)


class ArtifactState(enum.Enum):
    NOT_COMPUTED = "not_computed"
    COMPUTED = "computed"
    COMPUTED_EMPTY = "computed_empty"


@dataclass(frozen=True)
class Artifact:
    state: ArtifactState
    value: Any = None

    @property
    def computed(self) -> bool:
        return self.state is not ArtifactState.NOT_COMPUTED


_NOT_COMPUTED = Artifact(ArtifactState.NOT_COMPUTED)


class ArtifactCache:
    """Artifact states keyed by name; every key can be written once."""

    def __init__(self) -> None:
        self._entries: dict[str, Artifact] = {}

    def get(self, key: str) -> Artifact:
        _check_key(key)
        return self._entries.get(key, _NOT_COMPUTED)

    def set(self, key: str, value: Any) -> Artifact:
        return self._write(key, Artifact(ArtifactState.COMPUTED, value))

    def set_empty(self, key: str) -> Artifact:
        return self._write(key, Artifact(ArtifactState.COMPUTED_EMPTY))

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def _write(self, key: str, artifact: Artifact) -> Artifact:
        _check_key(key)
        if key in self._entries:
            raise ValueError(f"Artifact '{key}' is already computed")
        self._entries[key] = artifact
        return artifact


def _check_key(key: str) -> None:
    if key not in ARTIFACT_KEYS:
        raise KeyError(f"Unknown artifact '{key}'")
