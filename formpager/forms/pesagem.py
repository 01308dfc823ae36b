"""FOR-EC-4 – Pesagem dos animais (A4 portrait)."""

from __future__ import annotations

from typing import List

from ..engine.blocks import Column, SignatureLine, Spacer, Table
from ..engine.document import Document, Section
from ..engine.geometry import A4_PORTRAIT
from .base import FormDefinition, Values, text

WEIGHINGS = 4


def _four(values: Values, key: str, placeholder: str = "") -> List[str]:
    items = list(values.get(key) or [])[:WEIGHINGS]
    items += [""] * (WEIGHINGS - len(items))
    return [str(item) if item else placeholder for item in items]


def build(form: FormDefinition, values: Values) -> Document:
    schedule = Table(
        columns=(Column("", 40),) + tuple(Column("", 0, "center") for _ in range(WEIGHINGS)),
        rows=(
            ("Dia do Estudo:", *_four(values, "dias_estudo")),
            ("Data:", *_four(values, "datas", "(DD/MM/AA)")),
            ("Horário:", *_four(values, "horarios", "(HH:MM)")),
        ),
        min_row_height=7,
        filter_blank_rows=False,
        space_after=0.0,
    )

    weights = Table(
        columns=(Column("Animal", 40),) + tuple(Column("Peso (kg)", 0, "center") for _ in range(WEIGHINGS)),
        rows=tuple(
            (text(row, "animal"), *(text(row, f"peso{i}") for i in range(1, WEIGHINGS + 1)))
            for row in values.get("pesagens", [])
        ),
        min_row_height=7,
        space_after=8.0,
    )

    signatures = (
        SignatureLine("Realizado por (iniciais):", text(values, "realizado_por"),
                      date_value=text(values, "data_realizado")),
        SignatureLine("Registrado por (iniciais):", text(values, "registrado_por"),
                      date_value=text(values, "data_registrado")),
    )

    return Document(
        chrome=form.chrome(values),
        sections=(Section((schedule, weights, Spacer(2.0)) + signatures),),
        page_size=A4_PORTRAIT,
    )


FORM = FormDefinition(
    form_id="pesagem",
    document_code="FOR-EC-4",
    version="0",
    title="4.0 – PESAGEM DOS ANIMAIS",
    builder=build,
    description="Pesagem dos animais em até quatro momentos do estudo",
    filename="FOR-EC-4.0-PesagemAnimais.pdf",
)
