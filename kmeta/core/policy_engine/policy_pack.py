from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from .inheritance_policy import AllowListInheritance
from .policy_exceptions import InheritanceConfigurationError

ENV_INHERITED_LABELS = "KMETA_INHERITED_LABELS"
ENV_INHERITED_ANNOTATIONS = "KMETA_INHERITED_ANNOTATIONS"


@dataclass(frozen=True, slots=True)
class InheritancePack:
    """Loaded inheritance profile.

    Lists the labels and annotations of a cluster that are copied onto
    the resources generated from it. Entries are glob patterns.

    Supported schema (YAML/JSON)

    inherited_metadata:
      labels:
        - app.example.com/*
      annotations:
        - categories

    Treat pack files as trusted configuration. The API does not accept
    arbitrary filesystem paths unless explicitly allowed.
    """

    pack_id: str
    labels: Tuple[str, ...]
    annotations: Tuple[str, ...]

    def to_controller(self) -> AllowListInheritance:
        return AllowListInheritance(
            labels=self.labels,
            annotations=self.annotations,
            controller_id=f"pack:{self.pack_id}",
        )


def _strip_comment(line: str) -> str:
    # Our grammar has no quoted '#', so everything after it is a comment.
    if "#" in line:
        return line.split("#", 1)[0].rstrip()
    return line.rstrip()


def _unquote(item: str) -> str:
    if len(item) >= 2 and item[0] == item[-1] and item[0] in {"'", '"'}:
        return item[1:-1]
    return item


def _parse_minimal_yaml(text: str) -> Dict[str, Any]:
    """Parse the YAML subset used by inheritance packs.

    Supports:
    - Nested mappings by indentation
    - Block lists ("- item") and "[]"
    - Scalar strings

    This is not a general YAML parser.
    """

    lines = [ln for ln in (_strip_comment(raw) for raw in text.splitlines()) if ln.strip()]
    root: Dict[str, Any] = {}
    stack: List[Tuple[int, Dict[str, Any]]] = [(-1, root)]

    i = 0
    while i < len(lines):
        line = lines[i]
        indent = len(line) - len(line.lstrip(" "))
        stripped = line.strip()

        while len(stack) > 1 and indent <= stack[-1][0]:
            stack.pop()
        cur = stack[-1][1]

        if stripped.startswith("-"):
            raise InheritanceConfigurationError(f"Unexpected list item: {stripped}")

        if ":" not in stripped:
            raise InheritanceConfigurationError(f"Invalid line (expected key: value): {line}")

        key, rest = stripped.split(":", 1)
        key = key.strip()
        rest = rest.strip()

        if rest == "[]":
            cur[key] = []
            i += 1
            continue

        if rest != "":
            cur[key] = _unquote(rest)
            i += 1
            continue

        # Either a block list or a nested mapping follows.
        items: List[str] = []
        j = i + 1
        while j < len(lines):
            nxt = lines[j]
            nxt_indent = len(nxt) - len(nxt.lstrip(" "))
            nxt_stripped = nxt.strip()
            if nxt_indent < indent or not nxt_stripped.startswith("-"):
                break
            items.append(_unquote(nxt_stripped[1:].strip()))
            j += 1

        if items:
            cur[key] = items
            i = j
            continue

        nested: Dict[str, Any] = {}
        cur[key] = nested
        stack.append((indent, nested))
        i += 1

    return root


def _parse_json(text: str) -> Dict[str, Any]:
    try:
        obj = json.loads(text)
    except json.JSONDecodeError as e:
        raise InheritanceConfigurationError(f"Invalid inheritance pack JSON: {e}") from e
    if not isinstance(obj, dict):
        raise InheritanceConfigurationError("Inheritance pack JSON must be an object")
    return obj


def _pattern_list(section: Dict[str, Any], key: str) -> Tuple[str, ...]:
    raw = section.get(key, [])
    # A bare "labels:" line parses as an empty nested mapping; YAML reads it as null.
    if raw is None or raw == "" or raw == {}:
        return ()
    if not isinstance(raw, list) or not all(isinstance(x, str) for x in raw):
        raise InheritanceConfigurationError(f"inherited_metadata.{key} must be a list of strings")
    return tuple(x.strip() for x in raw if x.strip())


def inheritance_pack_from_dict(data: Dict[str, Any], *, pack_id: str) -> InheritancePack:
    section = data.get("inherited_metadata")
    if section is None:
        raise InheritanceConfigurationError("inheritance pack missing inherited_metadata")
    if section == "" or section == []:
        section = {}
    if not isinstance(section, dict):
        raise InheritanceConfigurationError("inherited_metadata must be a mapping")

    return InheritancePack(
        pack_id=pack_id,
        labels=_pattern_list(section, "labels"),
        annotations=_pattern_list(section, "annotations"),
    )


def load_inheritance_pack(path: str) -> InheritancePack:
    """Load an inheritance pack from YAML/JSON."""

    p = Path(path)
    text = p.read_text(encoding="utf-8")
    suffix = p.suffix.lower()

    if suffix == ".json" or text.lstrip().startswith("{"):
        data = _parse_json(text)
    elif suffix in {".yaml", ".yml"}:
        data = _parse_minimal_yaml(text)
    else:
        # Try YAML first, then JSON
        try:
            data = _parse_minimal_yaml(text)
        except InheritanceConfigurationError:
            data = _parse_json(text)

    return inheritance_pack_from_dict(data, pack_id=p.stem)


def _split_env_list(raw: str) -> Tuple[str, ...]:
    return tuple(x.strip() for x in raw.split(",") if x.strip())


def inheritance_pack_from_env(environ: Optional[Dict[str, str]] = None) -> InheritancePack:
    """Build a pack from KMETA_INHERITED_LABELS / KMETA_INHERITED_ANNOTATIONS.

    Both variables hold comma separated glob patterns. Unset means nothing
    is inherited.
    """

    env = os.environ if environ is None else environ
    return InheritancePack(
        pack_id="env",
        labels=_split_env_list(env.get(ENV_INHERITED_LABELS, "")),
        annotations=_split_env_list(env.get(ENV_INHERITED_ANNOTATIONS, "")),
    )


def resolve_inheritance_pack_path(
    pack: str,
    *,
    base_dir: str,
    allow_arbitrary_paths: bool = False,
) -> str:
    """Resolve a pack reference to a filesystem path.

    - If pack is an existing path and allow_arbitrary_paths is True, return it.
    - Otherwise, treat pack as a name within base_dir; ".yaml", ".yml" and
      ".json" are tried when no extension is given.

    Resolution is forced under base_dir to block path traversal.
    """

    p = Path(pack)
    if allow_arbitrary_paths and p.exists():
        return str(p)

    base = Path(base_dir).resolve()
    candidate = (base / pack).resolve()
    if base not in candidate.parents and candidate != base:
        raise InheritanceConfigurationError("inheritance pack path traversal blocked")

    if not candidate.exists() and candidate.suffix == "":
        for ext in (".yaml", ".yml", ".json"):
            c2 = Path(str(candidate) + ext).resolve()
            if base in c2.parents and c2.exists():
                candidate = c2
                break
    if not candidate.exists():
        raise FileNotFoundError(str(candidate))
    return str(candidate)
