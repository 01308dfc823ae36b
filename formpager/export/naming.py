"""Deterministic artifact filenames: ``<CODE>-<Version>-<Title>.pdf``."""

from __future__ import annotations

import re
import unicodedata

_UNSAFE = re.compile(r"[^A-Za-z0-9.]+")
_DASHES = str.maketrans({"–": "-", "—": "-", "º": "o", "ª": "a"})


def slugify(text: str) -> str:
    """Transliterate to ASCII and join words with hyphens.

    ``"13.0 – Finalização da Participação"`` becomes
    ``"13.0-Finalizacao-da-Participacao"``.
    """
    text = (text or "").translate(_DASHES)
    ascii_text = unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    return _UNSAFE.sub("-", ascii_text).strip("-.")


def artifact_filename(document_code: str, version: str, title: str, extension: str = "pdf") -> str:
    parts = [part for part in (slugify(document_code), slugify(version), slugify(title)) if part]
    stem = "-".join(parts) or "document"
    return f"{stem}.{extension}"
