from kmeta.core.metadata.apparmor import (
    annotate_apparmor,
    get_apparmor_annotations,
    is_apparmor_annotation_present,
    is_apparmor_annotation_present_in_object,
)
from kmeta.core.metadata.keys import APPARMOR_ANNOTATION_PREFIX
from kmeta.core.metadata.objects import Container, ObjectMeta, PodSpec

WEB = f"{APPARMOR_ANNOTATION_PREFIX}/web"
INIT = f"{APPARMOR_ANNOTATION_PREFIX}/init-setup"
MISSING = f"{APPARMOR_ANNOTATION_PREFIX}/missing"


def _spec() -> PodSpec:
    return PodSpec(
        containers=(Container(name="web"),),
        init_containers=(Container(name="init-setup"),),
    )


def test_extraction_keeps_only_annotations_for_existing_containers():
    annotations = {WEB: "profileA", MISSING: "profileB", "other/key": "x"}

    assert get_apparmor_annotations(_spec(), annotations) == {WEB: "profileA"}


def test_extraction_matches_init_containers():
    assert get_apparmor_annotations(_spec(), {INIT: "runtime/default"}) == {INIT: "runtime/default"}


def test_extraction_drops_keys_without_container_segment():
    annotations = {APPARMOR_ANNOTATION_PREFIX: "profileA"}

    assert get_apparmor_annotations(_spec(), annotations) == {}


def test_extraction_of_nothing_is_empty():
    assert get_apparmor_annotations(_spec(), None) == {}
    assert get_apparmor_annotations(PodSpec(), {WEB: "profileA"}) == {}


def test_extraction_is_idempotent():
    annotations = {WEB: "profileA", MISSING: "profileB", INIT: "p"}
    once = get_apparmor_annotations(_spec(), annotations)

    assert get_apparmor_annotations(_spec(), once) == once


def test_presence():
    assert is_apparmor_annotation_present(_spec(), {WEB: "profileA"})
    assert not is_apparmor_annotation_present(_spec(), {MISSING: "profileA"})
    assert not is_apparmor_annotation_present(_spec(), {})


def test_present_in_object_compares_only_apparmor_subset():
    meta = ObjectMeta(annotations={WEB: "profileA", "unrelated": "1"})

    assert is_apparmor_annotation_present_in_object(meta, _spec(), {WEB: "profileA", MISSING: "zzz"})
    assert not is_apparmor_annotation_present_in_object(meta, _spec(), {WEB: "profileB"})
    assert not is_apparmor_annotation_present_in_object(meta, _spec(), {WEB: "profileA", INIT: "p"})


def test_present_in_object_is_reflexive_and_symmetric():
    a = {WEB: "profileA", INIT: "p"}
    b = {WEB: "profileA"}
    spec = _spec()

    assert is_apparmor_annotation_present_in_object(ObjectMeta(annotations=a), spec, a)
    assert is_apparmor_annotation_present_in_object(
        ObjectMeta(annotations=a), spec, b
    ) == is_apparmor_annotation_present_in_object(ObjectMeta(annotations=b), spec, a)


def test_present_in_object_handles_missing_annotation_set():
    meta = ObjectMeta()

    assert is_apparmor_annotation_present_in_object(meta, _spec(), {"other/key": "x"})
    assert not is_apparmor_annotation_present_in_object(meta, _spec(), {WEB: "profileA"})


def test_annotate_writes_only_matching_keys():
    meta = ObjectMeta()

    annotate_apparmor(meta, _spec(), {WEB: "profileA", MISSING: "profileB", "other/key": "x"})

    assert meta.annotations == {WEB: "profileA"}


def test_annotate_overwrites_matching_keys_and_keeps_the_rest():
    meta = ObjectMeta(annotations={WEB: "old", "keep": "1"})

    annotate_apparmor(meta, _spec(), {WEB: "new"})

    assert meta.annotations == {WEB: "new", "keep": "1"}
