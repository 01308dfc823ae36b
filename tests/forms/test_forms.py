"""Tests for the built-in form catalogue."""

import pytest

from formpager.api import export_document
from formpager.engine.blocks import Table
from formpager.engine.paginator import compose
from formpager.exceptions import DocumentLoadError
from formpager.forms import FORMS, available_forms, build_form, get_form
from formpager.forms.finalizacao import LEGEND


def _texts(composition, page=None):
    return [op.text for op in composition.surface.texts(page)]


def _finalizacao_lines(count, blank_every=0):
    lines = []
    for index in range(count):
        if blank_every and index % blank_every == blank_every - 1:
            lines.append({"animal": "", "destino": {}})
            continue
        lines.append(
            {
                "animal": f"A-{index + 1:02d}",
                "momento": "D28",
                "data": "12/03/25",
                "finalizacao": "CONCLUIU",
                "destino": {"plantel": True},
                "registrado_por": "JS",
            }
        )
    return lines


class TestCatalogue:
    """Test cases for the form registry."""

    def test_available_forms_sorted(self):
        assert [form.form_id for form in available_forms()] == ["finalizacao", "necropsia", "pesagem"]

    @pytest.mark.parametrize(
        "form_id, filename",
        [
            ("necropsia", "FOR-EC-14.0-Necropsia.pdf"),
            ("finalizacao", "FOR-EC-13.0-Finalizacao-da-Participacao.pdf"),
            ("pesagem", "FOR-EC-4.0-PesagemAnimais.pdf"),
        ],
    )
    def test_forms_keep_their_distributed_filenames(self, form_id, filename, temp_dir):
        form = get_form(form_id)
        result = export_document(form.build(), output_dir=temp_dir, filename=form.filename)

        assert form.filename == filename
        assert result.path == temp_dir / filename

    def test_get_unknown_form(self):
        with pytest.raises(DocumentLoadError) as excinfo:
            get_form("hemograma")
        assert "necropsia" in excinfo.value.details

    @pytest.mark.parametrize("form_id", sorted(FORMS))
    def test_blank_form_composes(self, form_id):
        composition = compose(build_form(form_id))
        form = get_form(form_id)

        assert composition.total_pages >= 1
        assert form.title in _texts(composition, 1)
        assert f"Nº DOC.: {form.document_code}" in _texts(composition, 1)
        assert composition.result.warnings == ()

    def test_values_override_version_and_study_code(self):
        document = build_form("pesagem", {"versao": 3, "codigo_estudo": "00-0001-25"})
        assert document.chrome.version == "3"
        assert document.chrome.study_code == "00-0001-25"


class TestNecropsia:
    """Test cases for FOR-EC-14."""

    def test_conclusion_starts_on_page_two(self):
        composition = compose(build_form("necropsia", {"animal": "A-07", "causa_mortis": "Pneumonia"}))

        assert composition.total_pages == 2
        assert "Provável causa mortis:" in _texts(composition, 2)
        assert "Achados macroscópicos:" in _texts(composition, 1)
        assert "Página 2 de 2" in _texts(composition, 2)

    def test_material_checkbox(self):
        document = build_form("necropsia", {"material_enviado": "sim"})
        group = document.sections[0].blocks[6]
        assert [option.checked for option in group.options] == [False, True]


class TestFinalizacao:
    """Test cases for FOR-EC-13."""

    def test_blank_lines_are_elided(self):
        document = build_form("finalizacao", {"linhas": _finalizacao_lines(12, blank_every=3)})
        composition = compose(document)

        assert sum(composition.result.rows_per_page().values()) == 8
        assert composition.result.rows_per_page() == {1: 5, 2: 3}

    def test_legend_on_first_page_only(self):
        composition = compose(build_form("finalizacao", {"linhas": _finalizacao_lines(8)}))

        assert composition.total_pages == 2
        assert LEGEND in _texts(composition, 1)
        assert LEGEND not in _texts(composition, 2)
        assert _texts(composition, 2).count("Página 2 de 2") == 2

    def test_header_repeats(self):
        composition = compose(build_form("finalizacao", {"linhas": _finalizacao_lines(8)}))
        for page in (1, 2):
            assert "Registrado por" in _texts(composition, page)

    def test_destination_other_text(self):
        lines = [{"animal": "A-01", "destino": {"outros": True, "outros_texto": "Doação"}}]
        composition = compose(build_form("finalizacao", {"linhas": lines}))
        assert "Outros: Doação" in _texts(composition)


class TestPesagem:
    """Test cases for FOR-EC-4."""

    def test_single_page_with_placeholders(self):
        values = {
            "dias_estudo": ["D0", "D7"],
            "pesagens": [{"animal": "A-01", "peso1": "12.4", "peso2": "12.9"}, {"animal": ""}],
        }
        composition = compose(build_form("pesagem", values))
        texts = _texts(composition)

        assert composition.total_pages == 1
        assert texts.count("(DD/MM/AA)") == 4
        assert texts.count("(HH:MM)") == 4
        assert "D7" in texts
        assert texts.count("Peso (kg)") == 4
        assert composition.result.rows_per_page()[1] >= 3

    def test_schedule_rows_are_never_elided(self):
        document = build_form("pesagem")
        schedule = document.sections[0].blocks[0]
        assert isinstance(schedule, Table)
        assert len(schedule.prepare().rows) == 3
