from __future__ import annotations

import fnmatch
from dataclasses import dataclass, field
from typing import Callable, Tuple

KeyPredicate = Callable[[str], bool]


class InheritanceController:
    """
    Decides whether a label or annotation of a parent resource is copied
    onto the resources generated from it.

    Both tests must be pure: same key, same answer.
    """

    controller_id: str = "inheritance-controller"

    def is_label_inherited(self, key: str) -> bool:
        raise NotImplementedError

    def is_annotation_inherited(self, key: str) -> bool:
        raise NotImplementedError


def _as_tuple(value, what: str) -> Tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        raise TypeError(f"{what} must be a list of strings, not a string")
    out = tuple(value)
    for item in out:
        if not isinstance(item, str):
            raise TypeError(f"{what} must contain only strings")
    return out


@dataclass(frozen=True)
class InheritNothing(InheritanceController):
    controller_id: str = "inherit-nothing"

    def is_label_inherited(self, key: str) -> bool:
        return False

    def is_annotation_inherited(self, key: str) -> bool:
        return False


@dataclass(frozen=True)
class InheritEverything(InheritanceController):
    controller_id: str = "inherit-everything"

    def is_label_inherited(self, key: str) -> bool:
        return True

    def is_annotation_inherited(self, key: str) -> bool:
        return True


@dataclass(frozen=True)
class AllowListInheritance(InheritanceController):
    """
    Inherit the keys named in an allow-list.

    Entries are shell-style glob patterns ("app.example.com/*"), matched
    case-sensitively. An entry without wildcards only matches itself.
    """

    labels: Tuple[str, ...] = field(default_factory=tuple)
    annotations: Tuple[str, ...] = field(default_factory=tuple)
    controller_id: str = "allow-list"

    def __post_init__(self) -> None:
        object.__setattr__(self, "labels", _as_tuple(self.labels, "labels"))
        object.__setattr__(self, "annotations", _as_tuple(self.annotations, "annotations"))

    def is_label_inherited(self, key: str) -> bool:
        return any(fnmatch.fnmatchcase(key, pat) for pat in self.labels)

    def is_annotation_inherited(self, key: str) -> bool:
        return any(fnmatch.fnmatchcase(key, pat) for pat in self.annotations)


@dataclass(frozen=True)
class PrefixInheritance(InheritanceController):
    """Inherit every key that lives under one of the given prefixes."""

    label_prefixes: Tuple[str, ...] = field(default_factory=tuple)
    annotation_prefixes: Tuple[str, ...] = field(default_factory=tuple)
    controller_id: str = "prefix"

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "label_prefixes", _as_tuple(self.label_prefixes, "label_prefixes")
        )
        object.__setattr__(
            self,
            "annotation_prefixes",
            _as_tuple(self.annotation_prefixes, "annotation_prefixes"),
        )

    def is_label_inherited(self, key: str) -> bool:
        return key.startswith(self.label_prefixes) if self.label_prefixes else False

    def is_annotation_inherited(self, key: str) -> bool:
        return key.startswith(self.annotation_prefixes) if self.annotation_prefixes else False


@dataclass(frozen=True)
class PredicateInheritance(InheritanceController):
    """Adapt plain callables to the controller interface."""

    label_predicate: KeyPredicate
    annotation_predicate: KeyPredicate
    controller_id: str = "predicate"

    def __post_init__(self) -> None:
        if not callable(self.label_predicate) or not callable(self.annotation_predicate):
            raise TypeError("predicates must be callable")

    def is_label_inherited(self, key: str) -> bool:
        return bool(self.label_predicate(key))

    def is_annotation_inherited(self, key: str) -> bool:
        return bool(self.annotation_predicate(key))
