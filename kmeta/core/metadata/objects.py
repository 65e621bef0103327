from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Mapping, Optional, Tuple


def _string_map(value: Any, what: str) -> Optional[Dict[str, str]]:
    if value is None:
        return None

    if not isinstance(value, Mapping):
        raise TypeError(f"{what} must be a mapping")

    out: Dict[str, str] = {}
    for k, v in value.items():
        if not isinstance(k, str):
            raise TypeError(f"{what} keys must be strings")
        out[k] = str(v)
    return out


@dataclass
class ObjectMeta:
    """
    Label and annotation view of a resource.

    The owning resource belongs to the caller; only labels and annotations
    are ever mutated here. A set that was never written is None, which the
    readers treat exactly like an empty mapping.
    """

    name: str = ""
    namespace: str = ""
    labels: Optional[Dict[str, str]] = None
    annotations: Optional[Dict[str, str]] = None

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "ObjectMeta":
        """Build from a Kubernetes object or its metadata section."""
        if not isinstance(raw, Mapping):
            raise TypeError("object metadata must be a mapping")

        meta = raw.get("metadata", raw)
        if not isinstance(meta, Mapping):
            raise TypeError("metadata must be a mapping")

        return cls(
            name=str(meta.get("name", "") or ""),
            namespace=str(meta.get("namespace", "") or ""),
            labels=_string_map(meta.get("labels"), "labels"),
            annotations=_string_map(meta.get("annotations"), "annotations"),
        )

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "labels": dict(self.labels or {}),
            "annotations": dict(self.annotations or {}),
        }
        if self.name:
            out["name"] = self.name
        if self.namespace:
            out["namespace"] = self.namespace
        return out


def ensure_labels(meta: ObjectMeta) -> Dict[str, str]:
    """Return the live label dict, creating it on first write."""
    if meta.labels is None:
        meta.labels = {}
    return meta.labels


def ensure_annotations(meta: ObjectMeta) -> Dict[str, str]:
    """Return the live annotation dict, creating it on first write."""
    if meta.annotations is None:
        meta.annotations = {}
    return meta.annotations


@dataclass(frozen=True)
class Container:
    name: str
    image: Optional[str] = None

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "Container":
        if not isinstance(raw, Mapping):
            raise TypeError("container must be a mapping")
        image = raw.get("image")
        return cls(name=str(raw.get("name", "")), image=str(image) if image is not None else None)


@dataclass(frozen=True)
class PodSpec:
    """
    Container lists of a pod specification.

    Only container names are consulted, as matching keys for per-container
    annotations.
    """

    containers: Tuple[Container, ...] = field(default_factory=tuple)
    init_containers: Tuple[Container, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "containers", tuple(self.containers))
        object.__setattr__(self, "init_containers", tuple(self.init_containers))

    def all_containers(self) -> Iterator[Container]:
        """Primary containers first, then init containers."""
        yield from self.containers
        yield from self.init_containers

    def has_container(self, name: str) -> bool:
        return any(c.name == name for c in self.all_containers())

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "PodSpec":
        """Build from a pod, a pod template or a bare pod spec dict."""
        if not isinstance(raw, Mapping):
            raise TypeError("pod spec must be a mapping")

        spec: Any = raw
        if isinstance(spec, Mapping) and "spec" in spec:
            spec = spec["spec"]
        if isinstance(spec, Mapping) and "template" in spec:
            template = spec["template"] or {}
            if not isinstance(template, Mapping):
                raise TypeError("pod template must be a mapping")
            spec = template.get("spec") or {}
        if not isinstance(spec, Mapping):
            raise TypeError("pod spec must be a mapping")

        containers = spec.get("containers") or []
        init_containers = spec.get("initContainers", spec.get("init_containers")) or []
        return cls(
            containers=tuple(Container.from_dict(c) for c in containers),
            init_containers=tuple(Container.from_dict(c) for c in init_containers),
        )
