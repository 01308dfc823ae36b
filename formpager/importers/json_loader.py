"""
JSON loader for Document descriptions.

Example::

    {
      "page": {"size": "A4", "orientation": "landscape", "margins": 15},
      "chrome": {"title": "4.0 – Pesagem", "document_code": "FOR-EC-4", "version": "0"},
      "page_limits": {"first": 200, "other": 205},
      "sections": [
        {"title": "Dados", "blocks": [{"type": "labeled_line", "label": "Animal:", "value": "A-01"}]}
      ],
      "first_page_footer": [{"type": "paragraph", "text": "Legenda: ..."}]
    }

Block objects carry a ``type`` key (``labeled_line``, ``field_row``,
``signature_line``, ``multiline_text_box``, ``checkbox_group``, ``table``,
``paragraph``, ``spacer``); their other keys are the block's fields. Table
cells are strings or nested block objects.
"""

from __future__ import annotations

import dataclasses
import json
import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Literal, Mapping, Optional, Union, get_args, get_origin, get_type_hints

from ..engine.blocks import (
    Block,
    CheckboxGroup,
    CheckboxOption,
    Column,
    FieldRow,
    LabeledLine,
    MultilineTextBox,
    Paragraph,
    SignatureLine,
    Spacer,
    Table,
)
from ..engine.chrome import ChromeTemplate
from ..engine.document import Document, PageLimits, Section
from ..engine.geometry import DEFAULT_MARGINS, Margins, resolve_page_size
from ..engine.text_metrics import FontSpec
from ..exceptions import DocumentLoadError

logger = logging.getLogger(__name__)

Source = Union[str, Path, Mapping[str, Any]]


class DocumentLoader:
    """Builds a Document from its JSON description."""

    def __init__(self, json_data: Optional[Mapping[str, Any]] = None, json_path: Optional[Path] = None):
        """
        Args:
            json_data: Parsed JSON (dict); when given, json_path is ignored
            json_path: Path to a JSON file
        """
        if json_data is not None:
            self.json_data = json_data
        elif json_path:
            self.json_data = self._read(Path(json_path))
        else:
            raise DocumentLoadError("Either json_data or json_path is required")

        if not isinstance(self.json_data, Mapping):
            raise DocumentLoadError("Document description must be a JSON object")

        self._block_builders: Dict[str, Callable[[Mapping[str, Any], str], Block]] = {
            "labeled_line": self._labeled_line,
            "field_row": self._field_row,
            "signature_line": self._signature_line,
            "multiline_text_box": self._text_box,
            "checkbox_group": self._checkbox_group,
            "table": self._table,
            "paragraph": self._paragraph,
            "spacer": self._spacer,
        }

    @staticmethod
    def _read(path: Path) -> Any:
        try:
            with open(path, "r", encoding="utf-8") as handle:
                return json.load(handle)
        except OSError as exc:
            raise DocumentLoadError(f"Cannot read {path}", details=str(exc)) from exc
        except json.JSONDecodeError as exc:
            raise DocumentLoadError(f"Invalid JSON in {path}", details=str(exc)) from exc

    def to_document(self) -> Document:
        data = self.json_data
        page = data.get("page", {})
        if not isinstance(page, Mapping):
            raise DocumentLoadError("'page' must be an object")
        try:
            page_size = resolve_page_size(page.get("size", "A4"), page.get("orientation"))
        except (TypeError, ValueError) as exc:
            raise DocumentLoadError("Invalid page size", details=str(exc)) from exc

        chrome = self._chrome(data.get("chrome"))
        sections = tuple(self._section(s, f"sections[{i}]") for i, s in enumerate(_list(data, "sections", "document")))
        footer = tuple(
            self._block(b, f"first_page_footer[{i}]")
            for i, b in enumerate(_list(data, "first_page_footer", "document"))
        )

        document = Document(
            chrome=chrome,
            sections=sections,
            page_size=page_size,
            margins=self._margins(page.get("margins")),
            page_limits=self._page_limits(data.get("page_limits")),
            first_page_footer=footer,
        )
        logger.debug(f"Loaded document '{chrome.title}' with {len(sections)} section(s)")
        return document

    def _chrome(self, data: Any) -> ChromeTemplate:
        if not isinstance(data, Mapping):
            raise DocumentLoadError("'chrome' must be an object with title, document_code and version")
        values = dict(data)
        if "banner_fields" in values:
            values["banner_fields"] = tuple(
                _banner_field(pair, f"chrome.banner_fields[{i}]")
                for i, pair in enumerate(_list(values, "banner_fields", "chrome"))
            )
        return self._construct(ChromeTemplate, values, "chrome")

    def _margins(self, data: Any) -> Margins:
        if data is None:
            return DEFAULT_MARGINS
        if isinstance(data, (int, float)):
            return Margins.uniform(float(data))
        if isinstance(data, Mapping):
            return self._construct(Margins, data, "page.margins")
        raise DocumentLoadError("'page.margins' must be a number or an object")

    def _page_limits(self, data: Any) -> Optional[PageLimits]:
        if data is None:
            return None
        if not isinstance(data, Mapping) or "first" not in data or "other" not in data:
            raise DocumentLoadError("'page_limits' must have 'first' and 'other'")
        return PageLimits(
            _check_value(data["first"], float, "page_limits.first"),
            _check_value(data["other"], float, "page_limits.other"),
        )

    def _section(self, data: Any, where: str) -> Section:
        if not isinstance(data, Mapping):
            raise DocumentLoadError(f"{where} must be an object")
        blocks = tuple(self._block(b, f"{where}.blocks[{i}]") for i, b in enumerate(_list(data, "blocks", where)))
        return Section(
            blocks=blocks,
            title=_check_value(data.get("title"), Optional[str], f"{where}.title"),
            start_on_new_page=_check_value(data.get("start_on_new_page", False), bool, f"{where}.start_on_new_page"),
        )

    def _block(self, data: Any, where: str) -> Block:
        if not isinstance(data, Mapping):
            raise DocumentLoadError(f"{where} must be an object")
        kind = data.get("type")
        builder = self._block_builders.get(kind)
        if builder is None:
            raise DocumentLoadError(f"{where} has unknown block type: {kind!r}")
        values = {key: value for key, value in data.items() if key != "type"}
        return builder(values, where)

    def _labeled_line(self, values: Dict[str, Any], where: str) -> Block:
        return self._construct(LabeledLine, values, where)

    def _field_row(self, values: Dict[str, Any], where: str) -> Block:
        values["fields"] = tuple(
            self._construct(LabeledLine, f, f"{where}.fields[{i}]")
            for i, f in enumerate(_list(values, "fields", where))
        )
        if values.get("widths") is not None:
            values["widths"] = tuple(
                _check_value(w, float, f"{where}.widths[{i}]") for i, w in enumerate(_list(values, "widths", where))
            )
        return self._construct(FieldRow, values, where)

    def _signature_line(self, values: Dict[str, Any], where: str) -> Block:
        return self._construct(SignatureLine, values, where)

    def _text_box(self, values: Dict[str, Any], where: str) -> Block:
        return self._construct(MultilineTextBox, values, where)

    def _checkbox_group(self, values: Dict[str, Any], where: str) -> Block:
        options: List[CheckboxOption] = []
        for index, option in enumerate(_list(values, "options", where)):
            if isinstance(option, str):
                options.append(CheckboxOption(option))
            else:
                options.append(self._construct(CheckboxOption, option, f"{where}.options[{index}]"))
        values["options"] = tuple(options)
        return self._construct(CheckboxGroup, values, where)

    def _table(self, values: Dict[str, Any], where: str) -> Block:
        values["columns"] = tuple(
            self._construct(Column, c, f"{where}.columns[{i}]") for i, c in enumerate(_list(values, "columns", where))
        )
        rows = []
        for row_index, row in enumerate(_list(values, "rows", where)):
            if not isinstance(row, list):
                raise DocumentLoadError(f"{where}.rows[{row_index}] must be a list of cells")
            rows.append(tuple(self._cell(cell, f"{where}.rows[{row_index}][{i}]") for i, cell in enumerate(row)))
        values["rows"] = tuple(rows)
        return self._construct(Table, values, where)

    def _cell(self, cell: Any, where: str) -> Any:
        if cell is None or isinstance(cell, str):
            return cell
        if isinstance(cell, (int, float)):
            return str(cell)
        return self._block(cell, where)

    def _paragraph(self, values: Dict[str, Any], where: str) -> Block:
        return self._construct(Paragraph, values, where)

    def _spacer(self, values: Dict[str, Any], where: str) -> Block:
        return self._construct(Spacer, values, where)

    @classmethod
    def _construct(cls, target: type, values: Any, where: str):
        if not isinstance(values, Mapping):
            raise DocumentLoadError(f"{where} must be an object")
        hints = _field_types(target)
        checked = {
            key: _check_value(value, hints[key], f"{where}.{key}") if key in hints else value
            for key, value in values.items()
        }
        try:
            return target(**checked)
        except TypeError as exc:
            raise DocumentLoadError(f"Invalid {target.__name__} at {where}", details=str(exc)) from exc


def _list(data: Mapping[str, Any], key: str, where: str) -> List[Any]:
    value = data.get(key, [])
    if not isinstance(value, list):
        raise DocumentLoadError(f"{where}.{key} must be a list", details=repr(value))
    return value


def _banner_field(pair: Any, where: str) -> Any:
    if not isinstance(pair, list) or len(pair) != 2 or not all(isinstance(part, str) for part in pair):
        raise DocumentLoadError(f"{where} must be a [label, value] pair of strings", details=repr(pair))
    return tuple(pair)


_FIELD_TYPES: Dict[type, Dict[str, Any]] = {}


def _field_types(target: type) -> Dict[str, Any]:
    """Resolved annotations of a dataclass's init fields."""
    if target not in _FIELD_TYPES:
        hints = get_type_hints(target)
        _FIELD_TYPES[target] = {f.name: hints[f.name] for f in dataclasses.fields(target) if f.init}
    return _FIELD_TYPES[target]


def _check_value(value: Any, hint: Any, where: str) -> Any:
    """Validate one JSON value against a field annotation.

    Numbers, booleans, strings, literals and fonts are checked (fonts given as
    objects become FontSpec); container fields are left to their builders.
    """
    origin = get_origin(hint)
    if origin is Union:
        options = [arg for arg in get_args(hint) if arg is not type(None)]
        if value is None and len(options) < len(get_args(hint)):
            return None
        if len(options) == 1:
            return _check_value(value, options[0], where)
        return value
    if origin is Literal:
        if value not in get_args(hint):
            allowed = ", ".join(repr(arg) for arg in get_args(hint))
            raise DocumentLoadError(f"{where} must be one of {allowed}", details=repr(value))
        return value
    if hint is float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise DocumentLoadError(f"{where} must be a number", details=repr(value))
        return float(value)
    if hint is int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise DocumentLoadError(f"{where} must be an integer", details=repr(value))
        return value
    if hint is bool:
        if not isinstance(value, bool):
            raise DocumentLoadError(f"{where} must be true or false", details=repr(value))
        return value
    if hint is str:
        if not isinstance(value, str):
            raise DocumentLoadError(f"{where} must be a string", details=repr(value))
        return value
    if hint is FontSpec:
        if isinstance(value, FontSpec):
            return value
        return DocumentLoader._construct(FontSpec, value, where)
    return value


def load_document(source: Source) -> Document:
    """Load a Document from a JSON file path or an already parsed dict."""
    if isinstance(source, Mapping):
        return DocumentLoader(json_data=source).to_document()
    return DocumentLoader(json_path=Path(source)).to_document()
