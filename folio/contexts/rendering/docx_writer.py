"""
DOCX writer for resumes and cover letters using python-docx.

Produces single-column, ATS-readable Word documents: real text runs, built-in
list styles for bullets, no text boxes or tables for content.
"""

import io

from docx import Document
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.shared import Inches, Pt, RGBColor

from folio.contexts.rendering.outline import DocumentOutline, OutlineEntry
from folio.contexts.templating.customization import TemplateCustomization
from folio.contexts.templating.resume_data_structure import CoverLetterData
from folio.utils.text_processing import split_paragraphs

BODY_SIZE = Pt(10.5)
SMALL_SIZE = Pt(9.5)
HEADING_SIZE = Pt(12)
NAME_SIZE = Pt(20)


def _rgb(hex_color: str) -> RGBColor:
    return RGBColor.from_string(hex_color.lstrip("#").upper()[:6])


def _font_name(stack: str) -> str:
    return stack.split(",")[0].strip().strip("'\"")


def _new_document(customization: TemplateCustomization) -> Document:
    doc = Document()

    section = doc.sections[0]
    section.left_margin = Inches(0.75)
    section.right_margin = Inches(0.75)
    section.top_margin = Inches(0.6)
    section.bottom_margin = Inches(0.6)

    normal = doc.styles["Normal"]
    normal.font.name = _font_name(customization.fonts.body)
    normal.font.size = BODY_SIZE
    normal.font.color.rgb = _rgb(customization.colors.text)
    normal.paragraph_format.space_after = Pt(2)

    return doc


def _to_bytes(doc: Document) -> bytes:
    buffer = io.BytesIO()
    doc.save(buffer)
    return buffer.getvalue()


def _add_heading(doc, text: str, customization: TemplateCustomization, uppercase: bool):
    p = doc.add_paragraph()
    p.paragraph_format.space_before = Pt(10)
    p.paragraph_format.space_after = Pt(3)
    run = p.add_run(text.upper() if uppercase else text)
    run.bold = True
    run.font.size = HEADING_SIZE
    run.font.name = _font_name(customization.fonts.heading)
    run.font.color.rgb = _rgb(customization.colors.primary)


def _add_entry(doc, entry: OutlineEntry, customization: TemplateCustomization):
    p = doc.add_paragraph()
    p.paragraph_format.space_before = Pt(4)
    run = p.add_run(entry.title)
    run.bold = True
    if entry.dates:
        p.add_run(f"  |  {entry.dates}").font.size = SMALL_SIZE

    detail = ", ".join(part for part in (entry.subtitle, entry.location) if part)
    if detail:
        p = doc.add_paragraph()
        run = p.add_run(detail)
        run.italic = True
        run.font.color.rgb = _rgb(customization.colors.secondary)

    if entry.link:
        p = doc.add_paragraph()
        run = p.add_run(entry.link)
        run.font.size = SMALL_SIZE
        run.font.color.rgb = _rgb(customization.colors.accent)

    if entry.text:
        doc.add_paragraph(entry.text)

    for bullet in entry.bullets:
        doc.add_paragraph(bullet, style="List Bullet")


def write_resume_docx(
    outline: DocumentOutline,
    customization: TemplateCustomization,
    uppercase_headings: bool = False,
    center_header: bool = True,
) -> bytes:
    """
    Render a resume outline as a DOCX document.

    Args:
        outline: Resume outline from build_resume_outline()
        customization: Colors and fonts to apply
        uppercase_headings: Render section headings in capitals
        center_header: Center the name and contact block (left-aligned otherwise)

    Returns:
        DOCX file content
    """
    doc = _new_document(customization)
    alignment = WD_ALIGN_PARAGRAPH.CENTER if center_header else WD_ALIGN_PARAGRAPH.LEFT

    p = doc.add_paragraph()
    p.alignment = alignment
    run = p.add_run(outline.name)
    run.bold = True
    run.font.size = NAME_SIZE
    run.font.name = _font_name(customization.fonts.heading)
    run.font.color.rgb = _rgb(customization.colors.primary)

    if outline.headline:
        p = doc.add_paragraph()
        p.alignment = alignment
        run = p.add_run(outline.headline)
        run.font.color.rgb = _rgb(customization.colors.secondary)

    for line in (" | ".join(outline.contact), " | ".join(outline.links)):
        if line:
            p = doc.add_paragraph()
            p.alignment = alignment
            p.add_run(line).font.size = SMALL_SIZE

    for section in outline.sections:
        _add_heading(doc, section.heading, customization, uppercase_headings)

        if section.text:
            doc.add_paragraph(section.text)

        for group, items in section.groups.items():
            p = doc.add_paragraph()
            if len(section.groups) > 1 or group != "Skills":
                p.add_run(f"{group}: ").bold = True
            p.add_run(", ".join(items))

        for entry in section.entries:
            _add_entry(doc, entry, customization)

    doc.core_properties.title = f"{outline.name} - Resume" if outline.name else "Resume"
    doc.core_properties.author = outline.name

    return _to_bytes(doc)


def write_cover_letter_docx(
    letter: CoverLetterData,
    customization: TemplateCustomization,
    closing: str = "Sincerely,",
) -> bytes:
    """
    Render a cover letter as a DOCX document in block letter format.

    Args:
        letter: Cover letter with placeholders already applied
        customization: Colors and fonts to apply
        closing: Sign-off line above the signature

    Returns:
        DOCX file content
    """
    doc = _new_document(customization)

    p = doc.add_paragraph()
    run = p.add_run(letter.full_name)
    run.bold = True
    run.font.size = Pt(16)
    run.font.name = _font_name(customization.fonts.heading)
    run.font.color.rgb = _rgb(customization.colors.primary)

    contact = " | ".join(part for part in (letter.address, letter.phone, letter.email) if part)
    doc.add_paragraph().add_run(contact).font.size = SMALL_SIZE

    doc.add_paragraph(letter.date).paragraph_format.space_before = Pt(12)

    recipient = doc.add_paragraph()
    recipient.paragraph_format.space_before = Pt(12)
    recipient.add_run(letter.recipient_name)
    recipient.add_run().add_break()
    recipient.add_run(letter.company_name)

    if letter.job_title:
        p = doc.add_paragraph()
        p.add_run(f"Re: {letter.job_title}").bold = True

    doc.add_paragraph(f"Dear {letter.recipient_name},").paragraph_format.space_before = Pt(12)

    for paragraph in split_paragraphs(letter.content):
        doc.add_paragraph(paragraph).paragraph_format.space_after = Pt(8)

    doc.add_paragraph(closing).paragraph_format.space_before = Pt(12)
    doc.add_paragraph(letter.full_name)

    doc.core_properties.title = letter.title or "Cover Letter"
    doc.core_properties.author = letter.full_name

    return _to_bytes(doc)
