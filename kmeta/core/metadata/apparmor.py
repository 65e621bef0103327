from __future__ import annotations

import logging
from typing import Dict, Mapping, Optional

from .keys import APPARMOR_ANNOTATION_PREFIX
from .objects import ObjectMeta, PodSpec, ensure_annotations

log = logging.getLogger("kmeta.apparmor")


def get_apparmor_annotations(
    spec: PodSpec, annotations: Optional[Mapping[str, str]]
) -> Dict[str, str]:
    """Return the AppArmor annotations bound to a container of spec.

    An annotation is kept when its key starts with the AppArmor prefix and
    the part after the first "/" names a container or init container of
    the pod. Keys without a container segment are dropped, not reported.
    """

    found: Dict[str, str] = {}
    for key, value in (annotations or {}).items():
        if not key.startswith(APPARMOR_ANNOTATION_PREFIX):
            continue

        parts = key.split("/", 1)
        if len(parts) < 2:
            log.debug("apparmor_key_without_container", extra={"annotation": key})
            continue

        if spec.has_container(parts[1]):
            found[key] = value

    return found


def is_apparmor_annotation_present(
    spec: PodSpec, annotations: Optional[Mapping[str, str]]
) -> bool:
    return len(get_apparmor_annotations(spec, annotations)) != 0


def is_apparmor_annotation_present_in_object(
    meta: ObjectMeta, spec: PodSpec, annotations: Optional[Mapping[str, str]]
) -> bool:
    """Check that meta already carries exactly the AppArmor annotations wanted.

    Both sides are filtered against the same pod spec. A False result means
    the object needs to be re-annotated.
    """
    current = get_apparmor_annotations(spec, meta.annotations)
    wanted = get_apparmor_annotations(spec, annotations)
    return current == wanted


def annotate_apparmor(
    meta: ObjectMeta, spec: PodSpec, annotations: Optional[Mapping[str, str]]
) -> None:
    """Copy the AppArmor annotations matching spec's containers onto meta."""
    target = ensure_annotations(meta)
    for key, value in get_apparmor_annotations(spec, annotations).items():
        target[key] = value
