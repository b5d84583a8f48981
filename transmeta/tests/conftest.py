from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict

import polib
import pytest

SAMPLE_HEADERS: Dict[str, str] = {
    "Project-Id-Version": "Demo Plugin 1.4.2",
    "POT-Creation-Date": "2021-05-01 10:20:30+0200",
    "PO-Revision-Date": "2021-06-11 08:00+0000",
    "Language-Team": "German <de@example.org>",
    "Language": "de-de",
    "X-Generator": "Poedit 3.0",
    "MIME-Version": "1.0",
    "Content-Type": "text/plain; charset=UTF-8",
}


def _catalog(headers: Dict[str, str]) -> polib.POFile:
    po = polib.POFile()
    po.metadata = dict(headers)
    po.append(polib.POEntry(msgid="Hello", msgstr="Hallo"))
    return po


@pytest.fixture
def write_po(tmp_path: Path) -> Callable[..., Path]:
    def _write(name: str = "demo-de_DE.po", headers: Dict[str, str] | None = None) -> Path:
        path = tmp_path / name
        _catalog(SAMPLE_HEADERS if headers is None else headers).save(str(path))
        return path

    return _write


@pytest.fixture
def write_mo(tmp_path: Path) -> Callable[..., Path]:
    def _write(name: str = "demo-de_DE.mo", headers: Dict[str, str] | None = None) -> Path:
        path = tmp_path / name
        _catalog(SAMPLE_HEADERS if headers is None else headers).save_as_mofile(str(path))
        return path

    return _write
