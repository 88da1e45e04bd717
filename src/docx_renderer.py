"""Render a converted :class:`document_model.Document` as a DOCX file.

Layout follows the converter's decisions (direction, alignment, indent,
heading level); everything presentational (fonts, size, margins) comes from
:class:`config.RenderSettings`.

  - Persian runs: complex-script font + ``w:rtl``
  - RTL paragraphs: ``w:bidi``; the section is marked bidi too
  - Math blocks: math font, centred
  - Footnotes: a numbered notes block after the body text
"""

from __future__ import annotations

import logging
from pathlib import Path

from docx import Document as DocxDocument
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shared import Cm, Pt, RGBColor, Twips

from config import RenderSettings, load_render_settings
from document_model import Alignment, Document, FootnoteEntry, Paragraph, ParagraphKind, StyledRun
from script_classifier import Script

log = logging.getLogger(__name__)


ALIGNMENT_MAP = {
    Alignment.JUSTIFIED: WD_ALIGN_PARAGRAPH.JUSTIFY,
    Alignment.LEFT: WD_ALIGN_PARAGRAPH.LEFT,
    Alignment.CENTER: WD_ALIGN_PARAGRAPH.CENTER,
}

FIRST_LINE_INDENT_TWIPS = 708
MATH_SPACING_PT = 6
NOTES_SEPARATOR = "―" * 10
SECT_PR_AFTER_BIDI = ("w:rtlGutter", "w:docGrid", "w:printerSettings", "w:sectPrChange")


# ═══════════════════════════════════════════
# Document layout
# ═══════════════════════════════════════════

def configure_margins(doc: DocxDocument) -> None:
    """Apply 2.5 cm margins on all sides."""
    section = doc.sections[0]
    section.top_margin = Cm(2.5)
    section.bottom_margin = Cm(2.5)
    section.left_margin = Cm(2.5)
    section.right_margin = Cm(2.5)


def configure_base_typography(doc: DocxDocument, settings: RenderSettings) -> None:
    """Set the Normal style to the Latin font with the Persian complex-script font."""
    normal = doc.styles["Normal"]
    normal.font.name = settings.latin_font
    normal.font.size = Pt(settings.font_size_pt)
    normal.font.color.rgb = RGBColor(0, 0, 0)

    rPr = normal._element.get_or_add_rPr()
    rFonts = rPr.get_or_add_rFonts()
    rFonts.set(qn("w:cs"), settings.persian_font)


def mark_sections_bidi(doc: DocxDocument) -> None:
    for section in doc.sections:
        sectPr = section._sectPr
        if sectPr.find(qn("w:bidi")) is not None:
            continue
        bidi = OxmlElement("w:bidi")
        bidi.set(qn("w:val"), "1")
        # w:bidi goes before rtlGutter/docGrid/printerSettings in w:sectPr
        for tag in SECT_PR_AFTER_BIDI:
            successor = sectPr.find(qn(tag))
            if successor is not None:
                successor.addprevious(bidi)
                break
        else:
            sectPr.append(bidi)


# ═══════════════════════════════════════════
# RTL helpers
# ═══════════════════════════════════════════

def _set_paragraph_rtl(p) -> None:
    """Mark a paragraph as right-to-left at the XML level."""
    pPr = p._p.get_or_add_pPr()
    bidi = pPr.find(qn("w:bidi"))
    if bidi is None:
        bidi = OxmlElement("w:bidi")
        # w:bidi must precede spacing/ind/jc, which are added afterwards
        pStyle = pPr.find(qn("w:pStyle"))
        pPr.insert(1 if pStyle is not None else 0, bidi)
    bidi.set(qn("w:val"), "1")


def _set_run_fonts(run, ascii_font: str, cs_font: str) -> None:
    """Set ASCII/hAnsi and complex-script fonts on a run."""
    run.font.name = ascii_font
    rPr = run._r.get_or_add_rPr()
    rFonts = rPr.get_or_add_rFonts()
    rFonts.set(qn("w:ascii"), ascii_font)
    rFonts.set(qn("w:hAnsi"), ascii_font)
    rFonts.set(qn("w:cs"), cs_font)


# ═══════════════════════════════════════════
# Runs
# ═══════════════════════════════════════════

def add_styled_run(p, run: StyledRun, settings: RenderSettings):
    """Append one converted run to a python-docx paragraph."""
    is_persian = run.script is Script.PERSIAN
    text = str(run.footnote) if run.is_footnote_ref else run.marked_text

    r = p.add_run(text)
    _set_run_fonts(
        r,
        settings.latin_font,
        settings.persian_font if is_persian else settings.latin_font,
    )
    r.font.size = Pt(settings.font_size_pt)
    r.font.color.rgb = RGBColor(0, 0, 0)
    r.bold = run.bold
    if run.superscript:
        r.font.superscript = True
    elif run.subscript:
        r.font.subscript = True
    if is_persian:
        r.font.rtl = True
    return r


# ═══════════════════════════════════════════
# Paragraphs
# ═══════════════════════════════════════════

def _format_text_paragraph(p, paragraph: Paragraph) -> None:
    if paragraph.is_rtl:
        _set_paragraph_rtl(p)
    fmt = p.paragraph_format
    fmt.line_spacing = 1.0
    fmt.space_before = Pt(0)
    fmt.space_after = Pt(0)
    if paragraph.first_line_indent:
        fmt.first_line_indent = Twips(FIRST_LINE_INDENT_TWIPS)
    p.alignment = ALIGNMENT_MAP[paragraph.alignment]


def insert_blank(doc: DocxDocument) -> None:
    p = doc.add_paragraph()
    p.paragraph_format.space_after = Pt(0)


def insert_math(doc: DocxDocument, paragraph: Paragraph, settings: RenderSettings) -> None:
    p = doc.add_paragraph()
    fmt = p.paragraph_format
    fmt.space_before = Pt(MATH_SPACING_PT)
    fmt.space_after = Pt(MATH_SPACING_PT)
    p.alignment = WD_ALIGN_PARAGRAPH.CENTER

    r = p.add_run("".join(run.marked_text for run in paragraph.runs))
    _set_run_fonts(r, settings.math_font, settings.math_font)
    r.font.size = Pt(settings.font_size_pt)


def insert_heading(doc: DocxDocument, paragraph: Paragraph, settings: RenderSettings) -> None:
    p = doc.add_paragraph(style=f"Heading {paragraph.level}")
    _format_text_paragraph(p, paragraph)
    for run in paragraph.runs:
        add_styled_run(p, run, settings)


def insert_body(doc: DocxDocument, paragraph: Paragraph, settings: RenderSettings) -> None:
    p = doc.add_paragraph()
    _format_text_paragraph(p, paragraph)
    for run in paragraph.runs:
        add_styled_run(p, run, settings)


def insert_footnotes(doc: DocxDocument, entries: tuple[FootnoteEntry, ...], settings: RenderSettings) -> None:
    """Write footnote entries as a notes block after the body."""
    sep = doc.add_paragraph(NOTES_SEPARATOR)
    sep.paragraph_format.space_before = Pt(12)

    for entry in entries:
        p = doc.add_paragraph()
        _set_paragraph_rtl(p)
        p.alignment = WD_ALIGN_PARAGRAPH.RIGHT
        p.paragraph_format.space_after = Pt(0)

        ref = p.add_run(str(entry.index))
        _set_run_fonts(ref, settings.latin_font, settings.latin_font)
        ref.font.superscript = True

        body = p.add_run(" " + entry.text)
        _set_run_fonts(body, settings.latin_font, settings.persian_font)
        body.font.size = Pt(settings.font_size_pt)
        body.font.rtl = True


# ═══════════════════════════════════════════
# Document → DOCX
# ═══════════════════════════════════════════

def build_docx(document: Document, settings: RenderSettings | None = None) -> DocxDocument:
    """Build a python-docx document from a converted document."""
    settings = settings or load_render_settings()

    doc = DocxDocument()
    configure_margins(doc)
    configure_base_typography(doc, settings)
    mark_sections_bidi(doc)

    for paragraph in document.paragraphs:
        if paragraph.kind is ParagraphKind.BLANK:
            insert_blank(doc)
        elif paragraph.kind is ParagraphKind.MATH:
            insert_math(doc, paragraph, settings)
        elif paragraph.kind is ParagraphKind.HEADING:
            insert_heading(doc, paragraph, settings)
        else:
            insert_body(doc, paragraph, settings)

    if document.footnotes:
        insert_footnotes(doc, document.footnotes, settings)

    return doc


def render_document(document: Document, docx_path: Path, settings: RenderSettings | None = None) -> Path:
    """Render ``document`` and save it to ``docx_path``."""
    doc = build_docx(document, settings)
    doc.save(docx_path)
    log.debug("Saved %d paragraphs to %s", len(document.paragraphs), docx_path)
    return docx_path
