from __future__ import annotations

from .keys import (
    RECONCILIATION_LOOP_ANNOTATION_NAME,
    SKIP_EMPTY_WAL_ARCHIVE_CHECK,
    AnnotationStatus,
)
from .objects import ObjectMeta


def is_reconciliation_disabled(meta: ObjectMeta) -> bool:
    """True only when the reconciliation loop annotation is exactly "disabled"."""
    value = (meta.annotations or {}).get(RECONCILIATION_LOOP_ANNOTATION_NAME)
    return value == AnnotationStatus.DISABLED.value


def is_empty_wal_archive_check_enabled(meta: ObjectMeta) -> bool:
    """Whether to verify the WAL archive is empty before writing to it.

    Enabled by default. Only the skip annotation set to "enabled" turns the
    check off.
    """
    value = (meta.annotations or {}).get(SKIP_EMPTY_WAL_ARCHIVE_CHECK)
    return value != AnnotationStatus.ENABLED.value
