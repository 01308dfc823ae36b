"""Shared pieces of the built-in form catalogue."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional

from ..engine.chrome import ChromeTemplate
from ..engine.document import Document

Values = Mapping[str, Any]


@dataclass(frozen=True, slots=True)
class FormDefinition:
    """A printable form: its identity plus the builder turning field values into a Document.

    ``filename`` is the name the printed form is distributed under; exports fall
    back to a name derived from code, version and title when it is unset.
    """

    form_id: str
    document_code: str
    version: str
    title: str
    builder: Callable[["FormDefinition", Values], Document]
    description: str = ""
    filename: Optional[str] = None

    def build(self, values: Optional[Values] = None) -> Document:
        return self.builder(self, values or {})

    def chrome(self, values: Values, **overrides: Any) -> ChromeTemplate:
        return ChromeTemplate(
            title=self.title,
            document_code=self.document_code,
            version=str(values.get("versao", self.version)),
            study_code=text(values, "codigo_estudo"),
            logo_path=values.get("logo_path"),
            **overrides,
        )


def text(values: Values, key: str, default: str = "") -> str:
    value = values.get(key)
    if value is None:
        return default
    return str(value)


def flag(values: Values, key: str) -> bool:
    return bool(values.get(key, False))
