from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from typing import Any, Dict, List

from transmeta.core.catalogs import ReaderRegistry, load_builtin_readers, select_catalog_reader
from transmeta.core.config import ServiceConfig
from transmeta.core.errors import TransmetaError
from transmeta.core.metadata import reconcile
from transmeta.core.translations import Translation, TranslationKind, build_update_record
from transmeta.utils.json_safe import to_jsonable


def _print_json(payload: Any) -> None:
    print(json.dumps(to_jsonable(payload), indent=2, sort_keys=True))


def _registry(cfg: ServiceConfig) -> ReaderRegistry:
    registry = ReaderRegistry()
    load_builtin_readers(registry, json_max_bytes=cfg.json_max_bytes)
    return registry


def _existing_file(path: str) -> str | None:
    """Return the absolute path, or None after printing an error."""

    abs_path = os.path.abspath(path)
    if not os.path.exists(abs_path):
        print(f"error: file not found: {abs_path}", file=sys.stderr)
        return None
    if not os.path.isfile(abs_path):
        print(f"error: not a regular file: {abs_path}", file=sys.stderr)
        return None
    return abs_path


def cmd_list_readers(args: argparse.Namespace) -> int:
    """List built-in catalog readers."""
    for r in _registry(args.cfg).list_readers():
        md = r.metadata
        print(f"{md.reader_id}  v{md.version}  format={md.catalog_format}  name={md.name}")
    return 0


def cmd_inspect_file(args: argparse.Namespace) -> int:
    """Print a catalog's raw headers and its reconciled header map."""

    path = _existing_file(args.path)
    if path is None:
        return 2

    reader = select_catalog_reader(_registry(args.cfg), path)
    result = reader.read_headers(path)
    _print_json(
        {
            "reader_id": result.reader_id,
            "catalog_format": result.catalog_format,
            "path": result.path,
            "note": result.note,
            "raw_headers": result.headers,
            "headers": reconcile(result.headers),
        }
    )
    return 0


def _parse_header_pairs(pairs: List[str]) -> Dict[str, str]:
    out: Dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep:
            raise ValueError(f"--header expects KEY=VALUE, got {pair!r}")
        out[key] = value
    return out


def cmd_normalize(args: argparse.Namespace) -> int:
    """Reconcile raw headers given as a JSON object and/or --header pairs."""

    raw: Dict[str, Any] = {}
    if args.source:
        if args.source == "-":
            text = sys.stdin.read()
        else:
            path = _existing_file(args.source)
            if path is None:
                return 2
            with open(path, "r", encoding="utf-8") as f:
                text = f.read()
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            print(f"error: invalid JSON: {e}", file=sys.stderr)
            return 2
        if not isinstance(data, dict):
            print("error: expected a JSON object of headers", file=sys.stderr)
            return 2
        raw.update(data)

    try:
        raw.update(_parse_header_pairs(args.header or []))
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    _print_json(reconcile(raw))
    return 0


def cmd_update_record(args: argparse.Namespace) -> int:
    """Print the update-feed record for a catalog."""

    path = _existing_file(args.path)
    if path is None:
        return 2

    translation = Translation.from_file(
        path,
        text_domain=args.text_domain,
        kind=TranslationKind(args.type),
        registry=_registry(args.cfg),
    )
    _print_json(build_update_record(translation, args.slug))
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    """Run the transmeta API server."""

    try:
        import uvicorn
    except ImportError as e:
        print(f"error: uvicorn is required to serve the API: {e}", file=sys.stderr)
        return 2

    from transmeta.api.server import create_app

    app = create_app(config=ServiceConfig.from_env())
    uvicorn.run(app, host=args.host, port=int(args.port), log_level=args.log_level.lower())
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="transmeta", description="Translation catalog header tools")
    p.add_argument("--log-level", dest="root_log_level", default=None, help="Logging level (default: TRANSMETA_LOG_LEVEL or WARNING)")
    sub = p.add_subparsers(dest="command", required=True)

    lr = sub.add_parser("list-readers", help="List built-in catalog readers")
    lr.set_defaults(func=cmd_list_readers)

    ip = sub.add_parser("inspect-file", help="Show raw and normalized headers of a catalog")
    ip.add_argument("path", help="Path to a .mo, .po or .json catalog")
    ip.set_defaults(func=cmd_inspect_file)

    np = sub.add_parser("normalize", help="Normalize raw headers")
    np.add_argument("source", nargs="?", default=None, help="JSON file of headers, or - for stdin")
    np.add_argument("--header", action="append", metavar="KEY=VALUE", help="Raw header (repeatable)")
    np.set_defaults(func=cmd_normalize)

    up = sub.add_parser("update-record", help="Build an update-feed record for a catalog")
    up.add_argument("path", help="Path to a .mo, .po or .json catalog")
    up.add_argument("--slug", required=True, help="Theme or plugin slug")
    up.add_argument(
        "--type",
        default=TranslationKind.PLUGIN.value,
        choices=[k.value for k in TranslationKind],
        help="Translation kind (default: plugin)",
    )
    up.add_argument("--text-domain", default="default", help="Text domain (default: default)")
    up.set_defaults(func=cmd_update_record)

    sv = sub.add_parser("serve", help="Run the transmeta FastAPI server")
    sv.add_argument("--host", default="127.0.0.1", help="Bind host (default: 127.0.0.1)")
    sv.add_argument("--port", type=int, default=8080, help="Bind port (default: 8080)")
    sv.add_argument("--log-level", dest="log_level", default="info", help="Uvicorn log level")
    sv.set_defaults(func=cmd_serve)

    return p


def main(argv: List[str] | None = None) -> int:
    """CLI entry."""
    parser = build_parser()
    args = parser.parse_args(argv)

    cfg = ServiceConfig.from_env(default_log_level="WARNING")
    level = (getattr(args, "root_log_level", None) or cfg.log_level).upper()
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
    args.cfg = cfg

    try:
        return int(args.func(args))
    except TransmetaError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
