from __future__ import annotations

import logging
from typing import Mapping, Optional, Union

from kmeta.core.metadata.fixed import apply_fixed_annotations, apply_fixed_labels
from kmeta.core.metadata.objects import ObjectMeta

from .inheritance_policy import InheritanceController, KeyPredicate

log = logging.getLogger("kmeta.inheritance")

ControllerLike = Union[InheritanceController, KeyPredicate]


def _predicate(controller: ControllerLike, method: str) -> KeyPredicate:
    test = getattr(controller, method, None)
    if test is not None:
        return test
    if callable(controller):
        return controller
    raise TypeError(f"controller must implement {method}(key) or be callable")


def inherit_labels(
    meta: ObjectMeta,
    labels: Optional[Mapping[str, str]],
    fixed_labels: Optional[Mapping[str, str]],
    controller: ControllerLike,
) -> None:
    """Put labels on meta, fixed ones always and the others if inherited.

    Fixed labels are written first. A key that is both fixed and approved
    by the controller therefore ends up with the candidate value.
    """

    is_inherited = _predicate(controller, "is_label_inherited")
    apply_fixed_labels(meta, fixed_labels)

    target = meta.labels
    skipped = 0
    for key, value in (labels or {}).items():
        if is_inherited(key):
            target[key] = value
        else:
            skipped += 1

    log.debug(
        "labels_inherited",
        extra={"fixed": len(fixed_labels or {}), "candidates": len(labels or {}), "skipped": skipped},
    )


def inherit_annotations(
    meta: ObjectMeta,
    annotations: Optional[Mapping[str, str]],
    fixed_annotations: Optional[Mapping[str, str]],
    controller: ControllerLike,
) -> None:
    """Put annotations on meta, fixed ones always and the others if inherited.

    Same precedence as inherit_labels: fixed first, then approved
    candidates, which may overwrite a fixed value for the same key.
    """

    is_inherited = _predicate(controller, "is_annotation_inherited")
    apply_fixed_annotations(meta, fixed_annotations)

    target = meta.annotations
    skipped = 0
    for key, value in (annotations or {}).items():
        if is_inherited(key):
            target[key] = value
        else:
            skipped += 1

    log.debug(
        "annotations_inherited",
        extra={
            "fixed": len(fixed_annotations or {}),
            "candidates": len(annotations or {}),
            "skipped": skipped,
        },
    )
