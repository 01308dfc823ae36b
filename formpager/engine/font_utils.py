from __future__ import annotations

from typing import Optional

STANDARD_FONT_VARIANTS = {
    "Helvetica",
    "Helvetica-Bold",
    "Helvetica-Oblique",
    "Helvetica-BoldOblique",
    "Times-Roman",
    "Times-Bold",
    "Times-Italic",
    "Times-BoldItalic",
    "Courier",
    "Courier-Bold",
    "Courier-Oblique",
    "Courier-BoldOblique",
}

FONT_FALLBACKS = {
    "arial": "Helvetica",
    "helvetica": "Helvetica",
    "sans-serif": "Helvetica",
    "times": "Times-Roman",
    "times new roman": "Times-Roman",
    "serif": "Times-Roman",
    "courier new": "Courier",
    "monospace": "Courier",
}

_VARIANT_SUFFIXES = {
    "Helvetica": ("-Bold", "-Oblique", "-BoldOblique"),
    "Times-Roman": ("-Bold", "-Italic", "-BoldItalic"),
    "Courier": ("-Bold", "-Oblique", "-BoldOblique"),
}


def _normalize_base_font(font_name: Optional[str]) -> str:
    if not font_name or not font_name.strip():
        return "Helvetica"
    cleaned = font_name.strip()
    if cleaned in STANDARD_FONT_VARIANTS:
        return cleaned
    return FONT_FALLBACKS.get(cleaned.lower(), cleaned)


def resolve_font_variant(font_name: Optional[str], bold: bool = False, italic: bool = False) -> str:
    """Return the PDF font name for a family and weight/style flags.

    Standard families get their built-in variant names (``Helvetica-Bold``,
    ``Times-Italic``...). Any other name is assumed to be registered with
    ReportLab under ``<name>-Bold`` / ``<name>-Italic`` / ``<name>-BoldItalic``.
    """
    base = _normalize_base_font(font_name)
    if base in STANDARD_FONT_VARIANTS and base not in _VARIANT_SUFFIXES:
        # Already a concrete variant such as "Helvetica-Bold".
        return base

    if base in _VARIANT_SUFFIXES:
        bold_suffix, italic_suffix, both_suffix = _VARIANT_SUFFIXES[base]
        family = "Times" if base == "Times-Roman" else base
        if bold and italic:
            return f"{family}{both_suffix}"
        if bold:
            return f"{family}{bold_suffix}"
        if italic:
            return f"{family}{italic_suffix}"
        return base

    if bold and italic:
        return f"{base}-BoldItalic"
    if bold:
        return f"{base}-Bold"
    if italic:
        return f"{base}-Italic"
    return base
