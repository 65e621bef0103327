import json

import pytest

from kmeta.core.policy_engine.policy_exceptions import InheritanceConfigurationError
from kmeta.core.policy_engine.policy_pack import (
    inheritance_pack_from_env,
    load_inheritance_pack,
    resolve_inheritance_pack_path,
)

YAML_PACK = """\
# labels and annotations copied from the Cluster
inherited_metadata:
  labels:
    - app.example.com/*
    - "environment"
  annotations:
    - categories
"""


def test_load_yaml_pack(tmp_path):
    p = tmp_path / "default.yaml"
    p.write_text(YAML_PACK, encoding="utf-8")

    pack = load_inheritance_pack(str(p))

    assert pack.pack_id == "default"
    assert pack.labels == ("app.example.com/*", "environment")
    assert pack.annotations == ("categories",)

    controller = pack.to_controller()
    assert controller.controller_id == "pack:default"
    assert controller.is_label_inherited("app.example.com/tier")
    assert controller.is_annotation_inherited("categories")
    assert not controller.is_annotation_inherited("environment")


def test_load_json_pack(tmp_path):
    p = tmp_path / "strict.json"
    p.write_text(json.dumps({"inherited_metadata": {"labels": ["team"]}}), encoding="utf-8")

    pack = load_inheritance_pack(str(p))

    assert pack.labels == ("team",)
    assert pack.annotations == ()


def test_empty_section_inherits_nothing(tmp_path):
    p = tmp_path / "none.yaml"
    p.write_text("inherited_metadata:\n  labels: []\n", encoding="utf-8")

    controller = load_inheritance_pack(str(p)).to_controller()

    assert not controller.is_label_inherited("anything")


def test_invalid_packs_raise_configuration_error(tmp_path):
    missing = tmp_path / "missing.yaml"
    missing.write_text("other: x\n", encoding="utf-8")
    with pytest.raises(InheritanceConfigurationError):
        load_inheritance_pack(str(missing))

    bad_type = tmp_path / "bad.json"
    bad_type.write_text(json.dumps({"inherited_metadata": {"labels": "team"}}), encoding="utf-8")
    with pytest.raises(InheritanceConfigurationError):
        load_inheritance_pack(str(bad_type))

    bad_json = tmp_path / "broken.json"
    bad_json.write_text("{not json", encoding="utf-8")
    with pytest.raises(InheritanceConfigurationError):
        load_inheritance_pack(str(bad_json))


def test_pack_from_env(monkeypatch):
    monkeypatch.setenv("KMETA_INHERITED_LABELS", "app, example.com/* ,")
    monkeypatch.delenv("KMETA_INHERITED_ANNOTATIONS", raising=False)

    pack = inheritance_pack_from_env()

    assert pack.pack_id == "env"
    assert pack.labels == ("app", "example.com/*")
    assert pack.annotations == ()


def test_resolve_pack_path_infers_extension_and_blocks_traversal(tmp_path):
    packs = tmp_path / "packs"
    packs.mkdir()
    (packs / "default.yaml").write_text(YAML_PACK, encoding="utf-8")

    assert resolve_inheritance_pack_path("default", base_dir=str(packs)).endswith("default.yaml")

    with pytest.raises(InheritanceConfigurationError):
        resolve_inheritance_pack_path("../outside.yaml", base_dir=str(packs))

    with pytest.raises(FileNotFoundError):
        resolve_inheritance_pack_path("nope", base_dir=str(packs))


def test_bare_list_key_is_treated_as_empty(tmp_path):
    p = tmp_path / "annotations-only.yaml"
    p.write_text(
        "inherited_metadata:\n  labels:\n  annotations:\n    - categories\n",
        encoding="utf-8",
    )

    pack = load_inheritance_pack(str(p))

    assert pack.labels == ()
    assert pack.annotations == ("categories",)
