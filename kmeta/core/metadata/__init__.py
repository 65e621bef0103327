"""Metadata helpers for operator-managed resources.

Well-known key names, lazy label/annotation initialisation, fixed values,
AppArmor annotation matching and the status flag readers.
"""

from .apparmor import (
    annotate_apparmor,
    get_apparmor_annotations,
    is_apparmor_annotation_present,
    is_apparmor_annotation_present_in_object,
)
from .fixed import apply_fixed_annotations, apply_fixed_labels, label_cluster_name, set_operator_version
from .objects import Container, ObjectMeta, PodSpec, ensure_annotations, ensure_labels
from .status import is_empty_wal_archive_check_enabled, is_reconciliation_disabled

__all__ = [
    "ObjectMeta",
    "Container",
    "PodSpec",
    "ensure_labels",
    "ensure_annotations",
    "apply_fixed_labels",
    "apply_fixed_annotations",
    "label_cluster_name",
    "set_operator_version",
    "get_apparmor_annotations",
    "is_apparmor_annotation_present",
    "is_apparmor_annotation_present_in_object",
    "annotate_apparmor",
    "is_reconciliation_disabled",
    "is_empty_wal_archive_check_enabled",
]
