"""Raw WordprocessingML helpers for properties python-docx does not expose.

Each helper replaces any existing element of the same tag and inserts the new
one ahead of its schema successors so Word accepts the resulting part.
"""

from __future__ import annotations

from typing import Iterable, Mapping

from docx.oxml import parse_xml
from docx.oxml.ns import nsdecls, qn

__all__ = [
    "Border",
    "set_paragraph_borders",
    "set_paragraph_shading",
    "set_run_shading",
    "set_run_fonts",
    "set_cell_shading",
    "set_cell_width",
    "set_table_borders",
    "set_table_cell_margins",
    "set_table_width",
    "set_table_indent",
    "set_table_layout_fixed",
    "append_field",
    "enable_update_fields",
]

Border = Mapping[str, object]

_PPR_AFTER_PBDR = (
    "w:shd", "w:tabs", "w:suppressAutoHyphens", "w:kinsoku", "w:wordWrap",
    "w:overflowPunct", "w:topLinePunct", "w:autoSpaceDE", "w:autoSpaceDN",
    "w:bidi", "w:adjustRightInd", "w:snapToGrid", "w:spacing", "w:ind",
    "w:contextualSpacing", "w:mirrorIndents", "w:suppressOverlap", "w:jc",
    "w:textDirection", "w:textAlignment", "w:textboxTightWrap",
    "w:outlineLvl", "w:divId", "w:cnfStyle", "w:rPr", "w:sectPr", "w:pPrChange",
)
_PPR_AFTER_SHD = _PPR_AFTER_PBDR[1:]
_RPR_AFTER_RFONTS = (
    "w:b", "w:bCs", "w:i", "w:iCs", "w:caps", "w:smallCaps", "w:strike",
    "w:dstrike", "w:outline", "w:shadow", "w:emboss", "w:imprint", "w:noProof",
    "w:snapToGrid", "w:vanish", "w:webHidden", "w:color", "w:spacing", "w:w",
    "w:kern", "w:position", "w:sz", "w:szCs", "w:highlight", "w:u",
    "w:effect", "w:bdr", "w:shd", "w:fitText", "w:vertAlign", "w:rtl", "w:cs",
    "w:em", "w:lang", "w:eastAsianLayout", "w:specVanish", "w:oMath",
)
_RPR_AFTER_SHD = _RPR_AFTER_RFONTS[_RPR_AFTER_RFONTS.index("w:shd") + 1:]
_TCPR_AFTER_TCW = (
    "w:gridSpan", "w:hMerge", "w:vMerge", "w:tcBorders", "w:shd", "w:noWrap",
    "w:tcMar", "w:textDirection", "w:tcFitText", "w:vAlign", "w:hideMark",
)
_TCPR_AFTER_SHD = _TCPR_AFTER_TCW[_TCPR_AFTER_TCW.index("w:shd") + 1:]
_TBLPR_SEQUENCE = (
    "w:tblStyle", "w:tblpPr", "w:tblOverlap", "w:bidiVisual",
    "w:tblStyleRowBandSize", "w:tblStyleColBandSize", "w:tblW", "w:jc",
    "w:tblCellSpacing", "w:tblInd", "w:tblBorders", "w:shd", "w:tblLayout",
    "w:tblCellMar", "w:tblLook", "w:tblCaption", "w:tblDescription",
)


def _successors(sequence: tuple[str, ...], tag: str) -> tuple[str, ...]:
    return sequence[sequence.index(tag) + 1:]


def _replace(parent, element, successors: Iterable[str]) -> None:
    for existing in parent.findall(element.tag):
        parent.remove(existing)
    parent.insert_element_before(element, *successors)


def _border_xml(edge: str, border: Border) -> str:
    style = border.get("style", "single")
    size = border.get("size", 4)
    space = border.get("space", 0)
    color = border.get("color", "auto")
    return f'<w:{edge} w:val="{style}" w:sz="{size}" w:space="{space}" w:color="{color}"/>'


def _shading_xml(fill: str) -> str:
    return f'<w:shd {nsdecls("w")} w:val="clear" w:color="auto" w:fill="{fill}"/>'


def set_paragraph_borders(paragraph, **edges: Border) -> None:
    """Set ``top``/``left``/``bottom``/``right`` paragraph borders."""
    order = ("top", "left", "bottom", "right")
    inner = "".join(_border_xml(edge, edges[edge]) for edge in order if edge in edges)
    element = parse_xml(f'<w:pBdr {nsdecls("w")}>{inner}</w:pBdr>')
    _replace(paragraph._p.get_or_add_pPr(), element, _PPR_AFTER_PBDR)


def set_paragraph_shading(paragraph, fill: str) -> None:
    _replace(paragraph._p.get_or_add_pPr(), parse_xml(_shading_xml(fill)), _PPR_AFTER_SHD)


def set_run_shading(run, fill: str) -> None:
    _replace(run._r.get_or_add_rPr(), parse_xml(_shading_xml(fill)), _RPR_AFTER_SHD)


def set_run_fonts(run, latin: str, east_asia: str) -> None:
    """Set Latin and East-Asian typefaces on a single run."""
    element = parse_xml(
        f'<w:rFonts {nsdecls("w")} w:ascii="{latin}" w:hAnsi="{latin}" '
        f'w:eastAsia="{east_asia}" w:cs="{latin}"/>'
    )
    rpr = run._r.get_or_add_rPr()
    _replace(rpr, element, _RPR_AFTER_RFONTS)


def set_cell_shading(cell, fill: str) -> None:
    _replace(cell._tc.get_or_add_tcPr(), parse_xml(_shading_xml(fill)), _TCPR_AFTER_SHD)


def set_cell_width(cell, twips: int) -> None:
    element = parse_xml(f'<w:tcW {nsdecls("w")} w:w="{int(twips)}" w:type="dxa"/>')
    _replace(cell._tc.get_or_add_tcPr(), element, _TCPR_AFTER_TCW)


def set_table_borders(table, inside: bool = True, **edges: Border) -> None:
    """Set the outer borders of ``table`` and optionally its inner grid."""
    parts = [_border_xml(edge, edges[edge]) for edge in ("top", "left", "bottom", "right") if edge in edges]
    if inside:
        grid = edges.get("inside") or edges.get("top") or {}
        parts.append(_border_xml("insideH", grid))
        parts.append(_border_xml("insideV", grid))
    else:
        parts.append('<w:insideH w:val="nil"/>')
        parts.append('<w:insideV w:val="nil"/>')
    element = parse_xml(f'<w:tblBorders {nsdecls("w")}>{"".join(parts)}</w:tblBorders>')
    _replace(table._tbl.tblPr, element, _successors(_TBLPR_SEQUENCE, "w:tblBorders"))


def set_table_cell_margins(table, top: int = 0, left: int = 0, bottom: int = 0, right: int = 0) -> None:
    element = parse_xml(
        f'<w:tblCellMar {nsdecls("w")}>'
        f'<w:top w:w="{top}" w:type="dxa"/>'
        f'<w:left w:w="{left}" w:type="dxa"/>'
        f'<w:bottom w:w="{bottom}" w:type="dxa"/>'
        f'<w:right w:w="{right}" w:type="dxa"/>'
        f"</w:tblCellMar>"
    )
    _replace(table._tbl.tblPr, element, _successors(_TBLPR_SEQUENCE, "w:tblCellMar"))


def set_table_width(table, twips: int) -> None:
    element = parse_xml(f'<w:tblW {nsdecls("w")} w:w="{int(twips)}" w:type="dxa"/>')
    _replace(table._tbl.tblPr, element, _successors(_TBLPR_SEQUENCE, "w:tblW"))


def set_table_indent(table, twips: int) -> None:
    element = parse_xml(f'<w:tblInd {nsdecls("w")} w:w="{int(twips)}" w:type="dxa"/>')
    _replace(table._tbl.tblPr, element, _successors(_TBLPR_SEQUENCE, "w:tblInd"))


def set_table_layout_fixed(table) -> None:
    element = parse_xml(f'<w:tblLayout {nsdecls("w")} w:type="fixed"/>')
    _replace(table._tbl.tblPr, element, _successors(_TBLPR_SEQUENCE, "w:tblLayout"))


def append_field(paragraph, instruction: str, placeholder: str) -> None:
    """Append a complex field (begin/instr/separate/result/end) to ``paragraph``."""
    runs = (
        f'<w:r {nsdecls("w")}><w:fldChar w:fldCharType="begin"/></w:r>',
        f'<w:r {nsdecls("w")}><w:instrText xml:space="preserve"> {instruction} </w:instrText></w:r>',
        f'<w:r {nsdecls("w")}><w:fldChar w:fldCharType="separate"/></w:r>',
        f'<w:r {nsdecls("w")}><w:t xml:space="preserve">{_escape(placeholder)}</w:t></w:r>',
        f'<w:r {nsdecls("w")}><w:fldChar w:fldCharType="end"/></w:r>',
    )
    for run in runs:
        paragraph._p.append(parse_xml(run))


def enable_update_fields(document) -> None:
    """Ask Word to refresh fields (TOC included) when the file is opened."""
    settings = document.settings.element
    if settings.find(qn("w:updateFields")) is not None:
        return
    settings.append(parse_xml(f'<w:updateFields {nsdecls("w")} w:val="true"/>'))


def _escape(text: str) -> str:
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")
