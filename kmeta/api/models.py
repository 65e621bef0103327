from __future__ import annotations

from pydantic import BaseModel, Field
from typing import Dict, List, Optional


class ApiError(BaseModel):
    """Standard API error payload."""

    error: str
    detail: Optional[str] = None


class MetadataIn(BaseModel):
    """Labels and annotations of a target resource.

    null means the set was never written, which differs from {} only in
    that the engine has to create it.
    """

    name: str = ""
    namespace: str = ""
    labels: Optional[Dict[str, str]] = None
    annotations: Optional[Dict[str, str]] = None


class MetadataOut(BaseModel):
    name: str = ""
    namespace: str = ""
    labels: Dict[str, str] = Field(default_factory=dict)
    annotations: Dict[str, str] = Field(default_factory=dict)


class InheritanceProfileIn(BaseModel):
    """Inline allow-list profile, glob patterns."""

    labels: List[str] = Field(default_factory=list)
    annotations: List[str] = Field(default_factory=list)


class InheritIn(BaseModel):
    target: MetadataIn = Field(default_factory=MetadataIn)
    labels: Dict[str, str] = Field(default_factory=dict)
    annotations: Dict[str, str] = Field(default_factory=dict)
    fixed_labels: Dict[str, str] = Field(default_factory=dict)
    fixed_annotations: Dict[str, str] = Field(default_factory=dict)
    profile: Optional[InheritanceProfileIn] = None


class InheritOut(BaseModel):
    controller_id: str
    metadata: MetadataOut


class ContainerIn(BaseModel):
    name: str
    image: Optional[str] = None


class PodSpecIn(BaseModel):
    containers: List[ContainerIn] = Field(default_factory=list)
    initContainers: List[ContainerIn] = Field(default_factory=list)


class AppArmorIn(BaseModel):
    spec: PodSpecIn
    annotations: Dict[str, str] = Field(default_factory=dict)
    existing: Optional[MetadataIn] = None


class AppArmorOut(BaseModel):
    """AppArmor matching result.

    in_sync is only set when existing metadata was supplied. metadata is
    the existing (or an empty) object after annotation.
    """

    annotations: Dict[str, str] = Field(default_factory=dict)
    present: bool
    in_sync: Optional[bool] = None
    metadata: MetadataOut


class StatusIn(BaseModel):
    annotations: Optional[Dict[str, str]] = None


class StatusOut(BaseModel):
    reconciliation_disabled: bool
    empty_wal_archive_check_enabled: bool
