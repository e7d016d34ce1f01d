"""Per-conversation artifact store with merge-upsert semantics.

Every chat request builds its own :class:`ArtifactStore`, seeded with the
artifact the client currently has open.  Tools that surface a document
return it under the ``artifact`` key of their result; the orchestration
loop merges it here.

Merge rules:
- unknown id → append, filling ``type`` / ``title`` / ``content`` /
  ``metadata`` defaults;
- known id → incoming non-null scalar fields override, ``metadata`` is
  merged key by key (incoming wins), list position is kept.

Merging the same artifact twice is idempotent.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

from models.artifact import Artifact

logger = logging.getLogger(__name__)

_SCALAR_FIELDS = ("type", "title", "content", "external_url", "embed_url")


def coerce_artifact(payload: Artifact | Mapping[str, Any]) -> Artifact:
    """Validate a tool-emitted artifact payload, filling display defaults.

    Null values are dropped first so they fall back to the field defaults.
    """
    if isinstance(payload, Artifact):
        return payload
    cleaned = {k: v for k, v in payload.items() if v is not None}
    return Artifact.model_validate(cleaned)


def _merge_into(existing: Artifact, incoming: Artifact) -> Artifact:
    explicit = incoming.model_fields_set
    updates: dict[str, Any] = {}
    for field in _SCALAR_FIELDS:
        value = getattr(incoming, field)
        if field in explicit and value is not None:
            updates[field] = value
    updates["metadata"] = {**existing.metadata, **incoming.metadata}
    return existing.model_copy(update=updates)


def merge_artifact(
    artifacts: list[Artifact], incoming: Artifact | Mapping[str, Any]
) -> tuple[list[Artifact], Artifact]:
    """Pure upsert: return ``(new_list, resulting_artifact)``.

    The input list is not modified.
    """
    artifact = coerce_artifact(incoming)
    merged_list = list(artifacts)
    for idx, existing in enumerate(merged_list):
        if existing.id == artifact.id:
            merged = _merge_into(existing, artifact)
            merged_list[idx] = merged
            return merged_list, merged
    merged_list.append(artifact)
    return merged_list, artifact


class ArtifactStore:
    """Ordered artifact collection for one conversation request.

    ``active_id`` follows the most recently merged artifact unless the
    caller pins another one with :meth:`select`.
    """

    def __init__(self, artifacts: Iterable[Artifact | Mapping[str, Any]] = ()) -> None:
        self._artifacts: list[Artifact] = []
        self.active_id: str | None = None
        for artifact in artifacts:
            self.merge(artifact)

    def __len__(self) -> int:
        return len(self._artifacts)

    def __contains__(self, artifact_id: object) -> bool:
        return any(a.id == artifact_id for a in self._artifacts)

    def merge(self, incoming: Artifact | Mapping[str, Any]) -> Artifact:
        self._artifacts, merged = merge_artifact(self._artifacts, incoming)
        self.active_id = merged.id
        logger.debug("Artifact merged: id=%s total=%d", merged.id, len(self._artifacts))
        return merged

    def select(self, artifact_id: str) -> Artifact:
        artifact = self.get(artifact_id)
        if artifact is None:
            raise KeyError(artifact_id)
        self.active_id = artifact_id
        return artifact

    def get(self, artifact_id: str) -> Artifact | None:
        for artifact in self._artifacts:
            if artifact.id == artifact_id:
                return artifact
        return None

    @property
    def active(self) -> Artifact | None:
        return self.get(self.active_id) if self.active_id else None

    def snapshot(self) -> list[Artifact]:
        return list(self._artifacts)

    def ids(self) -> list[str]:
        return [a.id for a in self._artifacts]
