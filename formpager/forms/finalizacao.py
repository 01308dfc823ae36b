"""FOR-EC-13 – Finalização da participação na pesquisa (A4 landscape).

One table row per animal, with the outcome and destination as checkbox
groups. Only filled rows are printed; the legend explaining the
``Observação¹`` column appears on the first page only.
"""

from __future__ import annotations

from typing import Any, Mapping

from ..config import DEFAULTS
from ..engine.blocks import CheckboxGroup, CheckboxOption, Column, Paragraph, Table
from ..engine.document import Document, Section
from ..engine.geometry import A4_LANDSCAPE
from .base import FormDefinition, Values, flag, text

FINALIZACAO_OPTIONS = (
    ("CONCLUIU", "Concluiu participação"),
    ("REMOCAO", "Remoção pós-seleção"),
    ("NAO_SELECIONADO", "Não selecionado"),
)

COLUMNS = (
    Column("Animal", 32),
    Column("Momento (D)", 32),
    Column("Data", 32),
    Column("Finalização", 46),
    Column("Destino", 40),
    Column("Observação¹", 50),
    Column("Registrado por", 0),
)

LEGEND = "Legenda: ¹Observação – Descrever o motivo se aplicável."
ROW_HEIGHT = 26.0


def _finalizacao_cell(selected: str) -> CheckboxGroup:
    options = tuple(CheckboxOption(label, key == selected) for key, label in FINALIZACAO_OPTIONS)
    return CheckboxGroup(options, font=DEFAULTS.table_font, space_after=0.0)


def _destino_cell(destino: Mapping[str, Any]) -> CheckboxGroup:
    outros = "Outros"
    if flag(destino, "outros") and text(destino, "outros_texto"):
        outros = f"Outros: {text(destino, 'outros_texto')}"
    options = (
        CheckboxOption("Plantel", flag(destino, "plantel")),
        CheckboxOption("Composteira", flag(destino, "composteira")),
        CheckboxOption(outros, flag(destino, "outros")),
    )
    return CheckboxGroup(options, font=DEFAULTS.table_font, space_after=0.0)


def _row(line: Values) -> tuple:
    return (
        text(line, "animal"),
        text(line, "momento"),
        text(line, "data"),
        _finalizacao_cell(text(line, "finalizacao")),
        _destino_cell(line.get("destino") or {}),
        text(line, "observacao"),
        text(line, "registrado_por"),
    )


def build(form: FormDefinition, values: Values) -> Document:
    table = Table(
        columns=COLUMNS,
        rows=tuple(_row(line) for line in values.get("linhas", [])),
        min_row_height=ROW_HEIGHT,
    )
    return Document(
        chrome=form.chrome(values, footer_page_numbers=True),
        sections=(Section((table,)),),
        page_size=A4_LANDSCAPE,
        first_page_footer=(Paragraph(LEGEND, font=DEFAULTS.legend_font, space_after=0.0),),
    )


FORM = FormDefinition(
    form_id="finalizacao",
    document_code="FOR-EC-13",
    version="0",
    title="13.0 – FINALIZAÇÃO DA PARTICIPAÇÃO NA PESQUISA",
    builder=build,
    description="Finalização da participação dos animais na pesquisa",
    filename="FOR-EC-13.0-Finalizacao-da-Participacao.pdf",
)
