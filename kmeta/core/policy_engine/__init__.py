"""Inheritance policy engine.

Decides which labels and annotations of a parent resource are propagated
to the resources generated from it, with operator-fixed values applied
first.
"""

from .inheritance_engine import inherit_annotations, inherit_labels
from .inheritance_policy import (
    AllowListInheritance,
    InheritanceController,
    InheritEverything,
    InheritNothing,
    PredicateInheritance,
    PrefixInheritance,
)
from .policy_exceptions import InheritanceConfigurationError, MetadataError
from .policy_pack import (
    InheritancePack,
    inheritance_pack_from_env,
    load_inheritance_pack,
    resolve_inheritance_pack_path,
)

__all__ = [
    "inherit_labels",
    "inherit_annotations",
    "InheritanceController",
    "InheritNothing",
    "InheritEverything",
    "AllowListInheritance",
    "PrefixInheritance",
    "PredicateInheritance",
    "MetadataError",
    "InheritanceConfigurationError",
    "InheritancePack",
    "load_inheritance_pack",
    "inheritance_pack_from_env",
    "resolve_inheritance_pack_path",
]
