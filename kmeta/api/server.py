from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from kmeta.api.middleware import (
    AccessLogMiddleware,
    BodySizeLimitMiddleware,
    BodyTooLarge,
    RequestIdMiddleware,
    body_too_large_response,
)
from kmeta.api.models import (
    ApiError,
    AppArmorIn,
    AppArmorOut,
    InheritIn,
    InheritOut,
    MetadataIn,
    MetadataOut,
    StatusIn,
    StatusOut,
)
from kmeta.core.metadata import (
    Container,
    ObjectMeta,
    PodSpec,
    annotate_apparmor,
    get_apparmor_annotations,
    is_apparmor_annotation_present,
    is_apparmor_annotation_present_in_object,
    is_empty_wal_archive_check_enabled,
    is_reconciliation_disabled,
)
from kmeta.core.policy_engine import (
    AllowListInheritance,
    InheritanceController,
    MetadataError,
    inherit_annotations,
    inherit_labels,
    inheritance_pack_from_env,
    load_inheritance_pack,
    resolve_inheritance_pack_path,
)

log = logging.getLogger("kmeta.api")


@dataclass(frozen=True, slots=True)
class ServiceConfig:
    """Configuration for the API service.

    inheritance_pack names a pack under pack_dir. When unset, the profile
    comes from KMETA_INHERITED_LABELS / KMETA_INHERITED_ANNOTATIONS.
    """

    inheritance_pack: Optional[str] = None
    pack_dir: str = "."
    allow_pack_paths: bool = False
    max_body_bytes: int = 1024 * 1024
    log_level: str = "INFO"


def _env_int(name: str, default: int) -> int:
    """Read an integer environment variable, falling back to default."""

    raw = os.environ.get(name, "").strip()
    if not raw:
        return int(default)
    try:
        return int(raw)
    except ValueError:
        return int(default)


def load_service_config() -> ServiceConfig:
    return ServiceConfig(
        inheritance_pack=(os.environ.get("KMETA_INHERITANCE_PACK") or None),
        pack_dir=os.environ.get("KMETA_PACK_DIR", "."),
        allow_pack_paths=bool(int(os.environ.get("KMETA_ALLOW_PACK_PATHS", "0"))),
        max_body_bytes=_env_int("KMETA_MAX_BODY_BYTES", 1024 * 1024),
        log_level=os.environ.get("KMETA_LOG_LEVEL", "INFO").upper(),
    )


def load_service_controller(cfg: ServiceConfig) -> InheritanceController:
    if cfg.inheritance_pack:
        path = resolve_inheritance_pack_path(
            cfg.inheritance_pack,
            base_dir=cfg.pack_dir,
            allow_arbitrary_paths=cfg.allow_pack_paths,
        )
        return load_inheritance_pack(path).to_controller()
    return inheritance_pack_from_env().to_controller()


def _to_meta(raw: Optional[MetadataIn]) -> ObjectMeta:
    if raw is None:
        return ObjectMeta()
    return ObjectMeta(
        name=raw.name,
        namespace=raw.namespace,
        labels=dict(raw.labels) if raw.labels is not None else None,
        annotations=dict(raw.annotations) if raw.annotations is not None else None,
    )


def _from_meta(meta: ObjectMeta) -> MetadataOut:
    return MetadataOut(**meta.to_dict())


def create_app(*, config: Optional[ServiceConfig] = None) -> FastAPI:
    """Create the FastAPI app.

    The service inheritance profile is loaded once here; a broken pack
    fails app creation rather than individual requests.
    """

    cfg = config or load_service_config()
    controller = load_service_controller(cfg)

    log.setLevel(cfg.log_level)

    app = FastAPI(title="kmeta API", version="0.1")

    app.state.cfg = cfg
    app.state.controller = controller

    app.add_middleware(BodySizeLimitMiddleware, max_bytes=cfg.max_body_bytes)
    app.add_middleware(RequestIdMiddleware)
    app.add_middleware(AccessLogMiddleware)

    @app.exception_handler(MetadataError)
    async def _metadata_error(request: Request, exc: MetadataError) -> JSONResponse:
        body = ApiError(error=exc.__class__.__name__, detail=str(exc))
        return JSONResponse(status_code=400, content=body.model_dump())

    @app.exception_handler(BodyTooLarge)
    async def _body_too_large(request: Request, exc: BodyTooLarge) -> JSONResponse:
        return body_too_large_response(exc)

    @app.get("/healthz")
    def healthz() -> dict:
        return {"ok": True, "controller_id": controller.controller_id}

    @app.post("/inherit", response_model=InheritOut)
    def inherit(body: InheritIn) -> InheritOut:
        """Apply fixed and inherited metadata onto the target."""

        active: InheritanceController = controller
        if body.profile is not None:
            active = AllowListInheritance(
                labels=tuple(body.profile.labels),
                annotations=tuple(body.profile.annotations),
                controller_id="inline",
            )

        meta = _to_meta(body.target)
        inherit_labels(meta, body.labels, body.fixed_labels, active)
        inherit_annotations(meta, body.annotations, body.fixed_annotations, active)
        return InheritOut(controller_id=active.controller_id, metadata=_from_meta(meta))

    @app.post("/apparmor", response_model=AppArmorOut)
    def apparmor(body: AppArmorIn) -> AppArmorOut:
        spec = PodSpec(
            containers=tuple(Container(name=c.name, image=c.image) for c in body.spec.containers),
            init_containers=tuple(
                Container(name=c.name, image=c.image) for c in body.spec.initContainers
            ),
        )

        meta = _to_meta(body.existing)
        in_sync: Optional[bool] = None
        if body.existing is not None:
            in_sync = is_apparmor_annotation_present_in_object(meta, spec, body.annotations)

        annotate_apparmor(meta, spec, body.annotations)
        return AppArmorOut(
            annotations=get_apparmor_annotations(spec, body.annotations),
            present=is_apparmor_annotation_present(spec, body.annotations),
            in_sync=in_sync,
            metadata=_from_meta(meta),
        )

    @app.post("/status", response_model=StatusOut)
    def status(body: StatusIn) -> StatusOut:
        meta = ObjectMeta(annotations=dict(body.annotations) if body.annotations is not None else None)
        return StatusOut(
            reconciliation_disabled=is_reconciliation_disabled(meta),
            empty_wal_archive_check_enabled=is_empty_wal_archive_check_enabled(meta),
        )

    return app
