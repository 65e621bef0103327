from __future__ import annotations

from typing import Mapping, Optional

from .keys import CLUSTER_LABEL_NAME, OPERATOR_VERSION_ANNOTATION_NAME
from .objects import ObjectMeta, ensure_annotations, ensure_labels


def apply_fixed_labels(meta: ObjectMeta, fixed: Optional[Mapping[str, str]]) -> None:
    """Write operator-controlled labels, overriding any existing value."""
    labels = ensure_labels(meta)
    for key, value in (fixed or {}).items():
        labels[key] = value


def apply_fixed_annotations(meta: ObjectMeta, fixed: Optional[Mapping[str, str]]) -> None:
    """Write operator-controlled annotations, overriding any existing value."""
    annotations = ensure_annotations(meta)
    for key, value in (fixed or {}).items():
        annotations[key] = value


def label_cluster_name(meta: ObjectMeta, name: str) -> None:
    """Label the object with the name of its owning cluster."""
    ensure_labels(meta)[CLUSTER_LABEL_NAME] = name


def set_operator_version(meta: ObjectMeta, version: str) -> None:
    """Record the version of the operator that generated the object."""
    ensure_annotations(meta)[OPERATOR_VERSION_ANNOTATION_NAME] = version
