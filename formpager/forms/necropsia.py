"""FOR-EC-14 – Necropsia (A4 portrait, two pages)."""

from __future__ import annotations

from ..engine.blocks import (
    CheckboxGroup,
    CheckboxOption,
    FieldRow,
    LabeledLine,
    MultilineTextBox,
    SignatureLine,
)
from ..engine.document import Document, Section
from ..engine.geometry import A4_PORTRAIT
from .base import FormDefinition, Values, flag, text

DATE_PLACEHOLDER = "____/____/____"
TIME_PLACEHOLDER = "____:____"


def build(form: FormDefinition, values: Values) -> Document:
    material = text(values, "material_enviado").upper()

    findings = Section(
        (
            FieldRow(
                (
                    LabeledLine("Animal:", text(values, "animal")),
                    LabeledLine("Data:", text(values, "data"), placeholder=DATE_PLACEHOLDER, underline=False),
                ),
                widths=(3, 2),
            ),
            CheckboxGroup(
                (
                    CheckboxOption("Animal submetido à eutanásia.", flag(values, "eutanasia")),
                    CheckboxOption("Óbito por outra(s) causa(s).", flag(values, "obito_outras_causas")),
                ),
                columns=2,
            ),
            MultilineTextBox("Descrever:", text(values, "descricao_causa"), height=35),
            FieldRow(
                (
                    LabeledLine("Data da morte:", text(values, "data_morte"),
                                placeholder=DATE_PLACEHOLDER, underline=False),
                    LabeledLine("Data da necropsia:", text(values, "data_necropsia"),
                                placeholder=DATE_PLACEHOLDER, underline=False),
                    LabeledLine("Hora:", text(values, "hora_necropsia"),
                                placeholder=TIME_PLACEHOLDER, underline=False),
                ),
                widths=(5, 6, 3),
            ),
            MultilineTextBox("Achados macroscópicos:", text(values, "achados_macroscopicos"), height=40),
            MultilineTextBox("Exames complementares:", text(values, "exames_complementares"), height=32),
            CheckboxGroup(
                (
                    CheckboxOption("Não", material == "NAO"),
                    CheckboxOption("Sim", material == "SIM"),
                ),
                columns=2,
                label="Material enviado para laboratório?",
            ),
            MultilineTextBox("(informar material e laboratório)", text(values, "material_info"), height=22),
        )
    )

    conclusion = Section(
        (
            MultilineTextBox("Provável causa mortis:", text(values, "causa_mortis"), height=50, space_after=12),
            SignatureLine("Realizado por (iniciais):", text(values, "realizado_por"),
                          date_value=text(values, "realizado_data")),
            SignatureLine("Registrado por (iniciais):", text(values, "registrado_por"),
                          date_value=text(values, "registrado_data")),
        ),
        start_on_new_page=True,
    )

    return Document(
        chrome=form.chrome(values),
        sections=(findings, conclusion),
        page_size=A4_PORTRAIT,
    )


FORM = FormDefinition(
    form_id="necropsia",
    document_code="FOR-EC-14",
    version="0",
    title="14.0 – NECROPSIA",
    builder=build,
    description="Relatório de necropsia, com causa mortis e assinaturas na segunda página",
    filename="FOR-EC-14.0-Necropsia.pdf",
)
