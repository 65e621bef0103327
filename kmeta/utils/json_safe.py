from __future__ import annotations

from dataclasses import asdict, is_dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Mapping


def to_jsonable(obj: Any) -> Any:
    """
    Convert kmeta objects to JSON-serializable equivalents.

    - ObjectMeta and other objects exposing to_dict() use their own view.
    - str enums (AnnotationStatus, PodRole, PVCRole) become their value.
    - mappings keep string keys, sets are emitted sorted for stable output.
    """
    if obj is None or isinstance(obj, (bool, int, float)):
        return obj

    if isinstance(obj, Enum):
        return obj.value

    if isinstance(obj, str):
        return obj

    if isinstance(obj, Path):
        return str(obj)

    to_dict = getattr(obj, "to_dict", None)
    if callable(to_dict):
        return to_jsonable(to_dict())

    if is_dataclass(obj) and not isinstance(obj, type):
        return to_jsonable(asdict(obj))

    if isinstance(obj, Mapping):
        return {str(k): to_jsonable(v) for k, v in obj.items()}

    if isinstance(obj, (set, frozenset)):
        return sorted(to_jsonable(x) for x in obj)

    if isinstance(obj, (list, tuple)):
        return [to_jsonable(x) for x in obj]

    return str(obj)
