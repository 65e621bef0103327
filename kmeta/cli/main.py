from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from typing import Dict, List

from kmeta.core.metadata import (
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
    MetadataError,
    inherit_annotations,
    inherit_labels,
    inheritance_pack_from_env,
    load_inheritance_pack,
)
from kmeta.utils.json_safe import to_jsonable


def _read_json(path: str) -> dict:
    """Read a JSON file."""

    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise MetadataError(f"{path}: expected a JSON object")
    return data


def _print_json(payload) -> None:
    print(json.dumps(to_jsonable(payload), indent=2, sort_keys=True))


def _parse_pairs(pairs: List[str], what: str) -> Dict[str, str]:
    out: Dict[str, str] = {}
    for item in pairs or []:
        if "=" not in item:
            raise MetadataError(f"{what} must be KEY=VALUE, got: {item}")
        key, value = item.split("=", 1)
        out[key] = value
    return out


def cmd_inherit(args: argparse.Namespace) -> int:
    """Propagate a parent's metadata onto a target object."""

    target = ObjectMeta.from_dict(_read_json(args.target))
    source = ObjectMeta.from_dict(_read_json(args.source)) if args.source else ObjectMeta()

    if args.pack:
        pack = load_inheritance_pack(args.pack)
    else:
        pack = inheritance_pack_from_env()
    controller = pack.to_controller()

    inherit_labels(target, source.labels, _parse_pairs(args.fixed_label, "--fixed-label"), controller)
    inherit_annotations(
        target,
        source.annotations,
        _parse_pairs(args.fixed_annotation, "--fixed-annotation"),
        controller,
    )

    _print_json({"controller_id": controller.controller_id, "metadata": target})
    return 0


def cmd_apparmor(args: argparse.Namespace) -> int:
    """Show the AppArmor annotations of a pod that match its containers."""

    pod = _read_json(args.pod)
    spec = PodSpec.from_dict(pod)

    if args.annotations:
        annotations = ObjectMeta.from_dict(_read_json(args.annotations)).annotations
    else:
        annotations = ObjectMeta.from_dict(pod).annotations

    out = {
        "annotations": get_apparmor_annotations(spec, annotations),
        "present": is_apparmor_annotation_present(spec, annotations),
    }

    if args.existing:
        existing = ObjectMeta.from_dict(_read_json(args.existing))
        out["in_sync"] = is_apparmor_annotation_present_in_object(existing, spec, annotations)
        annotate_apparmor(existing, spec, annotations)
        out["metadata"] = existing

    _print_json(out)
    return 0


def cmd_status(args: argparse.Namespace) -> int:
    """Read the reconciliation and WAL archive check flags of an object."""

    meta = ObjectMeta.from_dict(_read_json(args.object))
    _print_json(
        {
            "reconciliation_disabled": is_reconciliation_disabled(meta),
            "empty_wal_archive_check_enabled": is_empty_wal_archive_check_enabled(meta),
        }
    )
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    """Run the kmeta API server (bound to 127.0.0.1 by default)."""

    try:
        import uvicorn
    except ImportError as e:
        print(f"error: uvicorn is required to serve the API: {e}", file=sys.stderr)
        return 2

    from kmeta.api.server import create_app

    app = create_app()
    uvicorn.run(app, host=args.host, port=int(args.port), log_level=args.log_level)
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="kmeta", description="Label and annotation inheritance tools")
    sub = p.add_subparsers(dest="cmd", required=True)

    ip = sub.add_parser("inherit", help="Apply fixed and inherited metadata to an object")
    ip.add_argument("target", help="JSON file with the target object")
    ip.add_argument("--source", default=None, help="JSON file with the parent object")
    ip.add_argument(
        "--fixed-label", action="append", default=[], metavar="KEY=VALUE", help="Label always set"
    )
    ip.add_argument(
        "--fixed-annotation",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Annotation always set",
    )
    ip.add_argument(
        "--pack",
        default=None,
        help="Inheritance pack (YAML/JSON). Defaults to KMETA_INHERITED_* env vars",
    )
    ip.set_defaults(func=cmd_inherit)

    ap = sub.add_parser("apparmor", help="Match AppArmor annotations against pod containers")
    ap.add_argument("pod", help="JSON file with a pod, pod template or workload")
    ap.add_argument(
        "--annotations", default=None, help="JSON object whose annotations are checked (default: the pod's)"
    )
    ap.add_argument("--existing", default=None, help="JSON object to compare with and annotate")
    ap.set_defaults(func=cmd_apparmor)

    st = sub.add_parser("status", help="Read reconciliation and WAL archive check flags")
    st.add_argument("object", help="JSON file with the object")
    st.set_defaults(func=cmd_status)

    sv = sub.add_parser("serve", help="Run the HTTP API")
    sv.add_argument("--host", default="127.0.0.1")
    sv.add_argument("--port", default=8080, type=int)
    sv.add_argument("--log-level", default="info")
    sv.set_defaults(func=cmd_serve)

    return p


def main(argv: List[str] | None = None) -> int:
    """CLI entry."""
    logging.basicConfig(level=os.environ.get("KMETA_LOG_LEVEL", "WARNING").upper())

    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        return int(args.func(args))
    except (MetadataError, OSError, TypeError, json.JSONDecodeError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
