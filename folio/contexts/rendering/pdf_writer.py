"""
PDF writer for resumes and cover letters using reportlab.

Builds text-based PDFs (selectable, ATS-parseable text) with the template's colors
and the closest base-14 font family to its CSS font stack.
"""

import io
from typing import Dict, List, Sequence
from xml.sax.saxutils import escape

from reportlab.lib.colors import HexColor
from reportlab.lib.enums import TA_CENTER, TA_LEFT, TA_RIGHT
from reportlab.lib.pagesizes import A4, letter
from reportlab.lib.styles import ParagraphStyle
from reportlab.lib.units import mm
from reportlab.platypus import (
    BaseDocTemplate,
    Frame,
    FrameBreak,
    KeepTogether,
    ListFlowable,
    ListItem,
    NextPageTemplate,
    PageTemplate,
    Paragraph,
    SimpleDocTemplate,
    Spacer,
    Table,
    TableStyle,
)
from reportlab.platypus.flowables import HRFlowable

from folio.contexts.rendering.outline import DocumentOutline, OutlineEntry, OutlineSection
from folio.contexts.templating.customization import TemplateCustomization
from folio.contexts.templating.resume_data_structure import CoverLetterData
from folio.utils.text_processing import split_paragraphs

MARGIN = 16 * mm
SIDEBAR_RATIO = 0.3

# Base-14 families: (regular, bold, italic)
BASE_FONTS = {
    "sans": ("Helvetica", "Helvetica-Bold", "Helvetica-Oblique"),
    "serif": ("Times-Roman", "Times-Bold", "Times-Italic"),
    "mono": ("Courier", "Courier-Bold", "Courier-Oblique"),
}

SERIF_HINTS = ("times", "georgia", "garamond", "playfair", "cambria", "merriweather", "palatino")
SANS_HINTS = ("helvetica", "arial", "inter", "lato", "system-ui", "roboto", "calibri", "segoe")
MONO_HINTS = ("courier", "mono", "consolas")


def font_family(stack: str) -> str:
    """
    Map a CSS font stack to a base-14 family key ("sans", "serif" or "mono").

    The first family in the stack that is recognizable decides; unknown stacks are sans.

    Example:
        >>> font_family("Playfair Display, serif")
        'serif'
        >>> font_family("Lato, sans-serif")
        'sans'
    """
    for token in (t.strip().strip("'\"").lower() for t in stack.split(",")):
        if token == "monospace" or any(hint in token for hint in MONO_HINTS):
            return "mono"
        if token == "sans-serif" or any(hint in token for hint in SANS_HINTS):
            return "sans"
        if token == "serif" or any(hint in token for hint in SERIF_HINTS):
            return "serif"
    return "sans"


def _page_size(customization: TemplateCustomization):
    # Widths given in inches imply US letter paper
    return letter if customization.layout.max_width.strip().endswith("in") else A4


def _esc(text: str) -> str:
    return escape(text or "")


def build_styles(customization: TemplateCustomization) -> Dict[str, ParagraphStyle]:
    """Paragraph styles for one document, derived from the customization."""
    body, body_bold, body_italic = BASE_FONTS[font_family(customization.fonts.body)]
    _, heading_bold, _ = BASE_FONTS[font_family(customization.fonts.heading)]

    text = HexColor(customization.colors.text)
    primary = HexColor(customization.colors.primary)
    secondary = HexColor(customization.colors.secondary)

    return {
        "name": ParagraphStyle(
            "name", fontName=heading_bold, fontSize=20, leading=24, textColor=primary
        ),
        "headline": ParagraphStyle(
            "headline", fontName=body, fontSize=11, leading=14, textColor=secondary
        ),
        "contact": ParagraphStyle(
            "contact", fontName=body, fontSize=9, leading=12, textColor=text
        ),
        "heading": ParagraphStyle(
            "heading",
            fontName=heading_bold,
            fontSize=12,
            leading=15,
            spaceBefore=10,
            spaceAfter=2,
            textColor=primary,
        ),
        "entry_title": ParagraphStyle(
            "entry_title", fontName=body_bold, fontSize=10, leading=13, textColor=text
        ),
        "entry_dates": ParagraphStyle(
            "entry_dates",
            fontName=body,
            fontSize=9,
            leading=13,
            alignment=TA_RIGHT,
            textColor=secondary,
        ),
        "entry_meta": ParagraphStyle(
            "entry_meta", fontName=body_italic, fontSize=9.5, leading=12, textColor=secondary
        ),
        "body": ParagraphStyle(
            "body", fontName=body, fontSize=10, leading=13, spaceAfter=3, textColor=text
        ),
        "bullet": ParagraphStyle(
            "bullet", fontName=body, fontSize=10, leading=13, textColor=text
        ),
    }


def _aligned(style: ParagraphStyle, alignment: int) -> ParagraphStyle:
    return ParagraphStyle(f"{style.name}_{alignment}", parent=style, alignment=alignment)


def _title_row(entry: OutlineEntry, styles, width: float):
    """Title on the left, dates on the right."""
    left = Paragraph(_esc(entry.title), styles["entry_title"])
    if not entry.dates:
        return left
    right = Paragraph(_esc(entry.dates), styles["entry_dates"])
    table = Table([[left, right]], colWidths=[width * 0.68, width * 0.32])
    table.setStyle(
        TableStyle(
            [
                ("VALIGN", (0, 0), (-1, -1), "BOTTOM"),
                ("LEFTPADDING", (0, 0), (-1, -1), 0),
                ("RIGHTPADDING", (0, 0), (-1, -1), 0),
                ("TOPPADDING", (0, 0), (-1, -1), 0),
                ("BOTTOMPADDING", (0, 0), (-1, -1), 1),
            ]
        )
    )
    return table


def _bullets(items: Sequence[str], styles) -> ListFlowable:
    return ListFlowable(
        [ListItem(Paragraph(_esc(item), styles["bullet"]), leftIndent=12) for item in items],
        bulletType="bullet",
        start="•",
        leftIndent=12,
        bulletFontSize=8,
    )


def _section_flowables(
    section: OutlineSection,
    styles,
    customization: TemplateCustomization,
    width: float,
    uppercase_headings: bool,
) -> List:
    heading = section.heading.upper() if uppercase_headings else section.heading
    flowables = [
        Paragraph(_esc(heading), styles["heading"]),
        HRFlowable(
            width="100%",
            thickness=0.75,
            color=HexColor(customization.colors.primary),
            spaceBefore=0,
            spaceAfter=4,
        ),
    ]

    if section.text:
        flowables.append(Paragraph(_esc(section.text), styles["body"]))

    for group, items in section.groups.items():
        label = f"<b>{_esc(group)}:</b> " if len(section.groups) > 1 or group != "Skills" else ""
        flowables.append(Paragraph(label + _esc(", ".join(items)), styles["body"]))

    for entry in section.entries:
        block = [_title_row(entry, styles, width)]
        detail = ", ".join(part for part in (entry.subtitle, entry.location) if part)
        if detail:
            block.append(Paragraph(_esc(detail), styles["entry_meta"]))
        if entry.link:
            block.append(Paragraph(_esc(entry.link), styles["entry_meta"]))
        if entry.text:
            block.append(Paragraph(_esc(entry.text), styles["body"]))
        if entry.bullets:
            block.append(_bullets(entry.bullets, styles))
        block.append(Spacer(1, 4))
        flowables.append(KeepTogether(block))

    return flowables


def _header_flowables(outline: DocumentOutline, styles, alignment: int) -> List:
    flowables = [Paragraph(_esc(outline.name), _aligned(styles["name"], alignment))]
    if outline.headline:
        flowables.append(Paragraph(_esc(outline.headline), _aligned(styles["headline"], alignment)))
    for line in (outline.contact, outline.links):
        if line:
            flowables.append(
                Paragraph(_esc(" | ".join(line)), _aligned(styles["contact"], alignment))
            )
    flowables.append(Spacer(1, 6))
    return flowables


def write_resume_pdf(
    outline: DocumentOutline,
    customization: TemplateCustomization,
    uppercase_headings: bool = False,
    center_header: bool = True,
    sidebar_sections: Sequence[str] = (),
) -> bytes:
    """
    Render a resume outline as a PDF.

    Args:
        outline: Resume outline from build_resume_outline()
        customization: Colors, fonts and layout to apply
        uppercase_headings: Render section headings in capitals
        center_header: Center the name and contact block (left-aligned otherwise)
        sidebar_sections: Section keys placed in the first page's sidebar column.
                          Ignored when the customization's sidebar is "none"

    Returns:
        PDF file content
    """
    buffer = io.BytesIO()
    page_width, page_height = _page_size(customization)
    styles = build_styles(customization)
    content_width = page_width - 2 * MARGIN

    sidebar = customization.layout.sidebar
    use_sidebar = sidebar != "none" and any(
        section.key in sidebar_sections for section in outline.sections
    )

    if not use_sidebar:
        doc = SimpleDocTemplate(
            buffer,
            pagesize=(page_width, page_height),
            leftMargin=MARGIN,
            rightMargin=MARGIN,
            topMargin=MARGIN,
            bottomMargin=MARGIN,
            title=f"{outline.name} - Resume",
            author=outline.name,
        )
        story = _header_flowables(outline, styles, TA_CENTER if center_header else TA_LEFT)
        for section in outline.sections:
            story.extend(
                _section_flowables(section, styles, customization, content_width, uppercase_headings)
            )
        doc.build(story)
        return buffer.getvalue()

    # First page: sidebar frame then main frame; later pages: one full-width frame
    gutter = 6 * mm
    frame_height = page_height - 2 * MARGIN
    side_width = content_width * SIDEBAR_RATIO
    main_width = content_width - side_width - gutter
    side_x = MARGIN if sidebar == "left" else MARGIN + main_width + gutter
    main_x = MARGIN + side_width + gutter if sidebar == "left" else MARGIN

    doc = BaseDocTemplate(
        buffer,
        pagesize=(page_width, page_height),
        title=f"{outline.name} - Resume",
        author=outline.name,
    )
    doc.addPageTemplates(
        [
            PageTemplate(
                id="first",
                frames=[
                    Frame(side_x, MARGIN, side_width, frame_height, id="sidebar", leftPadding=0),
                    Frame(main_x, MARGIN, main_width, frame_height, id="main", rightPadding=0),
                ],
            ),
            PageTemplate(
                id="later",
                frames=[Frame(MARGIN, MARGIN, content_width, frame_height, id="full")],
            ),
        ]
    )

    story = [NextPageTemplate("later")]
    story.extend(_header_flowables(outline, styles, TA_LEFT))
    main_sections = []
    for section in outline.sections:
        if section.key in sidebar_sections:
            story.extend(
                _section_flowables(section, styles, customization, side_width, uppercase_headings)
            )
        else:
            main_sections.append(section)

    story.append(FrameBreak())
    for section in main_sections:
        story.extend(
            _section_flowables(section, styles, customization, main_width, uppercase_headings)
        )

    doc.build(story)
    return buffer.getvalue()


def write_cover_letter_pdf(
    letter_data: CoverLetterData,
    customization: TemplateCustomization,
    closing: str = "Sincerely,",
    accent_rule: bool = False,
) -> bytes:
    """
    Render a cover letter as a PDF in block letter format.

    Args:
        letter_data: Cover letter with placeholders already applied
        customization: Colors and fonts to apply
        closing: Sign-off line above the signature
        accent_rule: Draw a colored rule under the sender block

    Returns:
        PDF file content
    """
    buffer = io.BytesIO()
    styles = build_styles(customization)
    doc = SimpleDocTemplate(
        buffer,
        pagesize=_page_size(customization),
        leftMargin=22 * mm,
        rightMargin=22 * mm,
        topMargin=20 * mm,
        bottomMargin=20 * mm,
        title=letter_data.title or "Cover Letter",
        author=letter_data.full_name,
    )

    contact = " | ".join(
        part for part in (letter_data.address, letter_data.phone, letter_data.email) if part
    )
    story = [
        Paragraph(_esc(letter_data.full_name), styles["name"]),
        Paragraph(_esc(contact), styles["contact"]),
    ]
    if accent_rule:
        story.append(
            HRFlowable(
                width="100%",
                thickness=2,
                color=HexColor(customization.colors.accent),
                spaceBefore=4,
                spaceAfter=4,
            )
        )
    story.extend(
        [
            Spacer(1, 12),
            Paragraph(_esc(letter_data.date), styles["body"]),
            Spacer(1, 10),
            Paragraph(
                f"{_esc(letter_data.recipient_name)}<br/>{_esc(letter_data.company_name)}",
                styles["body"],
            ),
        ]
    )
    if letter_data.job_title:
        story.append(Paragraph(f"<b>Re: {_esc(letter_data.job_title)}</b>", styles["body"]))

    story.extend(
        [Spacer(1, 10), Paragraph(f"Dear {_esc(letter_data.recipient_name)},", styles["body"])]
    )
    for paragraph in split_paragraphs(letter_data.content):
        story.append(Paragraph(_esc(paragraph), styles["body"]))
        story.append(Spacer(1, 4))

    story.extend(
        [
            Spacer(1, 10),
            Paragraph(_esc(closing), styles["body"]),
            Spacer(1, 18),
            Paragraph(_esc(letter_data.full_name), styles["body"]),
        ]
    )

    doc.build(story)
    return buffer.getvalue()
