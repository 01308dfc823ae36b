"""Built-in form catalogue."""

from __future__ import annotations

from typing import Dict, List, Optional

from ..engine.document import Document
from ..exceptions import DocumentLoadError
from . import finalizacao, necropsia, pesagem
from .base import FormDefinition, Values

FORMS: Dict[str, FormDefinition] = {
    form.form_id: form for form in (finalizacao.FORM, necropsia.FORM, pesagem.FORM)
}


def available_forms() -> List[FormDefinition]:
    return [FORMS[form_id] for form_id in sorted(FORMS)]


def get_form(form_id: str) -> FormDefinition:
    try:
        return FORMS[form_id]
    except KeyError:
        raise DocumentLoadError(
            f"Unknown form: {form_id}",
            details=f"available: {', '.join(sorted(FORMS))}",
        ) from None


def build_form(form_id: str, values: Optional[Values] = None) -> Document:
    """Build the Document of a catalogue form from its field values."""
    return get_form(form_id).build(values)


__all__ = ["FORMS", "FormDefinition", "available_forms", "build_form", "get_form"]
