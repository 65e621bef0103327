from kmeta.core.metadata.keys import RECONCILIATION_LOOP_ANNOTATION_NAME, SKIP_EMPTY_WAL_ARCHIVE_CHECK
from kmeta.core.metadata.objects import ObjectMeta
from kmeta.core.metadata.status import is_empty_wal_archive_check_enabled, is_reconciliation_disabled


def test_reconciliation_disabled_only_for_exact_value():
    assert is_reconciliation_disabled(ObjectMeta(annotations={RECONCILIATION_LOOP_ANNOTATION_NAME: "disabled"}))
    assert not is_reconciliation_disabled(ObjectMeta(annotations={RECONCILIATION_LOOP_ANNOTATION_NAME: "Disabled"}))
    assert not is_reconciliation_disabled(ObjectMeta(annotations={RECONCILIATION_LOOP_ANNOTATION_NAME: "enabled"}))
    assert not is_reconciliation_disabled(ObjectMeta(annotations={}))
    assert not is_reconciliation_disabled(ObjectMeta())


def test_empty_wal_archive_check_is_enabled_by_default():
    assert is_empty_wal_archive_check_enabled(ObjectMeta())
    assert is_empty_wal_archive_check_enabled(ObjectMeta(annotations={}))


def test_skip_annotation_enabled_turns_check_off():
    assert not is_empty_wal_archive_check_enabled(ObjectMeta(annotations={SKIP_EMPTY_WAL_ARCHIVE_CHECK: "enabled"}))
    assert is_empty_wal_archive_check_enabled(ObjectMeta(annotations={SKIP_EMPTY_WAL_ARCHIVE_CHECK: "disabled"}))
    assert is_empty_wal_archive_check_enabled(ObjectMeta(annotations={SKIP_EMPTY_WAL_ARCHIVE_CHECK: "Enabled"}))
