from __future__ import annotations

import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, File, Form, HTTPException, UploadFile

from transmeta.api.middleware import RequestContextMiddleware
from transmeta.api.models import (
    FileInfoOut,
    InspectOut,
    NormalizeIn,
    NormalizeOut,
    ReaderOut,
    TranslationListOut,
    TranslationOut,
    UpdateRecordOut,
)
from transmeta.core.catalogs import (
    ReaderRegistry,
    load_builtin_readers,
    select_catalog_reader,
    sniff_file_info,
)
from transmeta.core.config import ServiceConfig
from transmeta.core.errors import CatalogReadError, NoReaderFoundError
from transmeta.core.metadata import reconcile
from transmeta.core.translations import (
    Translation,
    TranslationKind,
    TranslationRegistry,
    build_update_record,
)

log = logging.getLogger("transmeta.api")


def save_upload_to_temp(upload: UploadFile, *, max_bytes: int) -> Path:
    """Copy an upload into a fresh temp directory, enforcing the size cap.

    Only the basename of the client filename is used; the extension
    drives reader selection. The directory is removed again if the copy
    fails for any reason.
    """

    tmpdir = Path(tempfile.mkdtemp(prefix="transmeta_api_"))
    safe_name = os.path.basename(upload.filename or "catalog")[:255] or "catalog"
    out = tmpdir / safe_name
    total = 0
    try:
        with out.open("wb") as f:
            while True:
                chunk = upload.file.read(1024 * 1024)
                if not chunk:
                    break
                total += len(chunk)
                if total > max_bytes:
                    raise HTTPException(status_code=413, detail="upload_too_large")
                f.write(chunk)
    except BaseException:
        shutil.rmtree(tmpdir, ignore_errors=True)
        raise
    return out


def create_app(*, config: ServiceConfig | None = None) -> FastAPI:
    """Create the FastAPI app."""

    cfg = config or ServiceConfig.from_env()
    log.setLevel(cfg.log_level)

    app = FastAPI(title="transmeta API", version="0.1")
    app.state.cfg = cfg

    app.add_middleware(RequestContextMiddleware)

    readers = ReaderRegistry()
    load_builtin_readers(readers, json_max_bytes=cfg.json_max_bytes)
    app.state.readers = readers

    # Process-local; lost on restart.
    app.state.translations = TranslationRegistry()

    def _kind(value: str) -> TranslationKind:
        try:
            return TranslationKind(value)
        except ValueError:
            raise HTTPException(status_code=400, detail=f"unknown_kind: {value}")

    def _load_translation(path: Path, *, text_domain: str, kind: TranslationKind) -> Translation:
        try:
            return Translation.from_file(str(path), text_domain=text_domain, kind=kind, registry=readers)
        except NoReaderFoundError:
            raise HTTPException(status_code=400, detail="unsupported_catalog")
        except CatalogReadError as exc:
            raise HTTPException(status_code=400, detail=str(exc))

    def _translation_out(handle: str, translation: Translation) -> TranslationOut:
        return TranslationOut(
            handle=handle,
            text_domain=translation.text_domain,
            kind=translation.kind.value,
            locale=translation.locale,
            reader_id=translation.reader_id,
            headers=translation.metadata.as_dict(),
        )

    @app.get("/health")
    def health() -> Dict[str, Any]:
        return {"ok": True, "readers": len(readers.list_readers())}

    @app.get("/readers", response_model=List[ReaderOut])
    def list_readers_endpoint() -> List[ReaderOut]:
        return [
            ReaderOut(
                reader_id=r.metadata.reader_id,
                name=r.metadata.name,
                version=r.metadata.version,
                catalog_format=r.metadata.catalog_format,
            )
            for r in readers.list_readers()
        ]

    @app.post("/normalize", response_model=NormalizeOut)
    def normalize_endpoint(body: NormalizeIn) -> NormalizeOut:
        return NormalizeOut(headers=dict(reconcile(body.headers)))

    @app.post("/inspect", response_model=InspectOut)
    def inspect_endpoint(file: UploadFile = File(...)) -> InspectOut:
        """Read a catalog's raw headers and reconcile them."""

        path = save_upload_to_temp(file, max_bytes=cfg.max_upload_bytes)
        try:
            try:
                reader = select_catalog_reader(readers, str(path))
                result = reader.read_headers(str(path))
            except NoReaderFoundError:
                raise HTTPException(status_code=400, detail="unsupported_catalog")
            except CatalogReadError as exc:
                raise HTTPException(status_code=400, detail=str(exc))

            info = sniff_file_info(str(path))
            return InspectOut(
                file=FileInfoOut(
                    filename=path.name,
                    extension=info.extension,
                    mime_type=info.mime_type,
                    mime_confidence=info.mime_confidence,
                    size_bytes=info.size_bytes,
                ),
                reader_id=result.reader_id,
                catalog_format=result.catalog_format,
                raw_headers=dict(result.headers),
                headers=dict(reconcile(result.headers)),
                note=result.note,
            )
        finally:
            shutil.rmtree(path.parent, ignore_errors=True)

    @app.post("/update-record", response_model=UpdateRecordOut)
    def update_record_endpoint(
        file: UploadFile = File(...),
        slug: str = Form(...),
        kind: str = Form(default=TranslationKind.PLUGIN.value),
        text_domain: str = Form(default="default"),
    ) -> UpdateRecordOut:
        path = save_upload_to_temp(file, max_bytes=cfg.max_upload_bytes)
        try:
            translation = _load_translation(path, text_domain=text_domain, kind=_kind(kind))
        finally:
            shutil.rmtree(path.parent, ignore_errors=True)
        return UpdateRecordOut(**build_update_record(translation, slug).to_dict())

    @app.post("/translations", response_model=TranslationOut)
    def add_translation_endpoint(
        file: UploadFile = File(...),
        text_domain: str = Form(default="default"),
        kind: str = Form(default=TranslationKind.FILE.value),
    ) -> TranslationOut:
        """Load a catalog and keep it in the in-memory registry."""

        path = save_upload_to_temp(file, max_bytes=cfg.max_upload_bytes)
        try:
            translation = _load_translation(path, text_domain=text_domain, kind=_kind(kind))
        finally:
            shutil.rmtree(path.parent, ignore_errors=True)

        registry: TranslationRegistry = app.state.translations
        handle = registry.set(translation)
        log.info("translation_stored", extra={"text_domain": translation.text_domain, "handle": handle})
        return _translation_out(handle, translation)

    @app.get("/translations/{text_domain}", response_model=TranslationListOut)
    def list_translations_endpoint(text_domain: str) -> TranslationListOut:
        registry: TranslationRegistry = app.state.translations
        domain = registry.get(text_domain)
        if not domain:
            raise HTTPException(status_code=404, detail="unknown_text_domain")

        items = [
            _translation_out(handle, translation)
            for entries in domain.values()
            for handle, translation in entries.items()
        ]
        return TranslationListOut(text_domain=text_domain, translations=items)

    @app.delete("/translations/{text_domain}")
    def remove_translations_endpoint(
        text_domain: str,
        locale: Optional[str] = None,
        handle: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Drop a whole text domain, one locale of it, or one stored entry."""

        if handle and not locale:
            raise HTTPException(status_code=400, detail="handle_requires_locale")

        registry: TranslationRegistry = app.state.translations
        found = registry.get(text_domain, locale, handle)
        if found is None:
            raise HTTPException(status_code=404, detail="unknown_translation")

        if handle:
            removed = 1
        elif locale:
            removed = len(found)
        else:
            removed = sum(len(entries) for entries in found.values())

        registry.remove(text_domain, locale, handle)
        log.info("translation_removed", extra={"text_domain": text_domain, "locale": locale, "removed": removed})
        return {"ok": True, "removed": removed}

    return app
