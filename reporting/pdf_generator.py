"""
ASSERO Asset Valuation Report

Renders a valuation (estimate, attributes, market context, comparables)
into a printable multi-page PDF.
Uses ReportLab for deterministic PDF generation: with a fixed report date
the same input always yields identical bytes.

Output Structure:
1. Estimate & Asset Details
2. Market Context & Comparables
3. Methodology, Market Factors & Disclaimer

Optional data (seasonal signal, price statistics, comparables, individual
attributes) is omitted when absent. No placeholder rows are rendered.
"""

from datetime import date
from io import BytesIO
from typing import Any, Dict, List, Optional, Sequence
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER, TA_LEFT
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas
from reportlab.platypus import (
    KeepTogether,
    PageBreak,
    Paragraph,
    SimpleDocTemplate,
    Spacer,
    Table,
    TableStyle,
)

from core.models import (
    AssetCategory,
    ComparableAsset,
    MarketContext,
    PriceDistribution,
    TrendDirection,
    ValuationResult,
)
from utils.formatting import format_currency, format_percent

from .schemas import (
    BRAND_NAME,
    CATEGORY_LABELS,
    DATA_SOURCE_NOTES,
    DEMAND_LABELS,
    DISCLAIMER,
    DISCLAIMER_TITLE,
    FOOTER_TEXT,
    MARKET_FACTORS,
    METHODOLOGY,
    REPORT_SUBTITLE,
    SEASONAL_LABELS,
    TREND_LABELS,
    attribute_rows,
    report_title,
)


# =============================================================================
# Color Palette
# =============================================================================

class Palette:
    """Print-friendly palette: charcoal text, navy accent, amber notice box."""
    BLACK = colors.Color(0.1, 0.1, 0.1)
    CHARCOAL = colors.Color(0.2, 0.2, 0.22)
    GRAY = colors.Color(0.5, 0.5, 0.5)
    LIGHT_GRAY = colors.Color(0.85, 0.85, 0.85)
    PALE_GRAY = colors.Color(0.95, 0.95, 0.95)
    WHITE = colors.white

    ACCENT = colors.Color(0.15, 0.25, 0.4)
    ACCENT_LIGHT = colors.Color(0.92, 0.94, 0.97)

    NOTICE_LIGHT = colors.Color(1.0, 0.95, 0.8)


# =============================================================================
# Style Configuration
# =============================================================================

def get_report_styles() -> dict:
    """Paragraph styles for the valuation report."""
    styles = getSampleStyleSheet()

    styles.add(ParagraphStyle(
        name='ReportTitle',
        parent=styles['Normal'],
        fontName='Helvetica-Bold',
        fontSize=20,
        leading=25,
        textColor=Palette.BLACK,
        spaceAfter=6,
    ))
    styles.add(ParagraphStyle(
        name='CategoryBadge',
        parent=styles['Normal'],
        fontName='Helvetica-Bold',
        fontSize=9,
        leading=11,
        textColor=Palette.ACCENT,
    ))
    styles.add(ParagraphStyle(
        name='SectionTitle',
        parent=styles['Normal'],
        fontName='Helvetica-Bold',
        fontSize=14,
        leading=18,
        textColor=Palette.ACCENT,
        spaceBefore=10,
        spaceAfter=8,
    ))
    styles.add(ParagraphStyle(
        name='EstimateLabel',
        parent=styles['Normal'],
        fontSize=11,
        leading=14,
        alignment=TA_CENTER,
        textColor=Palette.CHARCOAL,
    ))
    styles.add(ParagraphStyle(
        name='EstimateValue',
        parent=styles['Normal'],
        fontName='Helvetica-Bold',
        fontSize=28,
        leading=34,
        alignment=TA_CENTER,
        textColor=Palette.ACCENT,
    ))
    styles.add(ParagraphStyle(
        name='EstimateRange',
        parent=styles['Normal'],
        fontSize=10,
        leading=13,
        alignment=TA_CENTER,
        textColor=Palette.GRAY,
    ))
    styles.add(ParagraphStyle(
        name='Body',
        parent=styles['Normal'],
        fontSize=10,
        leading=14,
        alignment=TA_LEFT,
        textColor=Palette.CHARCOAL,
        spaceAfter=6,
    ))
    styles.add(ParagraphStyle(
        name='BulletText',
        parent=styles['Normal'],
        fontSize=10,
        leading=14,
        leftIndent=10,
        textColor=Palette.CHARCOAL,
    ))
    styles.add(ParagraphStyle(
        name='TableCell',
        parent=styles['Normal'],
        fontSize=9,
        leading=12,
        textColor=Palette.CHARCOAL,
    ))
    styles.add(ParagraphStyle(
        name='NoticeTitle',
        parent=styles['Normal'],
        fontName='Helvetica-Bold',
        fontSize=11,
        leading=14,
        textColor=Palette.BLACK,
        spaceAfter=4,
    ))
    styles.add(ParagraphStyle(
        name='NoticeText',
        parent=styles['Normal'],
        fontSize=8.5,
        leading=12,
        textColor=Palette.CHARCOAL,
    ))

    return styles


def _table_style(header: bool = True) -> TableStyle:
    commands = [
        ('FONTNAME', (0, 0), (-1, -1), 'Helvetica'),
        ('FONTSIZE', (0, 0), (-1, -1), 9),
        ('TEXTCOLOR', (0, 0), (-1, -1), Palette.CHARCOAL),
        ('VALIGN', (0, 0), (-1, -1), 'MIDDLE'),
        ('TOPPADDING', (0, 0), (-1, -1), 5),
        ('BOTTOMPADDING', (0, 0), (-1, -1), 5),
        ('LINEBELOW', (0, 0), (-1, -1), 0.5, Palette.LIGHT_GRAY),
    ]
    if header:
        commands += [
            ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
            ('BACKGROUND', (0, 0), (-1, 0), Palette.ACCENT_LIGHT),
            ('TEXTCOLOR', (0, 0), (-1, 0), Palette.ACCENT),
        ]
    return TableStyle(commands)


# =============================================================================
# Renderer
# =============================================================================

class ValuationReportRenderer:
    """
    Generates ASSERO valuation report PDFs.

    Usage:
        renderer = ValuationReportRenderer()
        pdf_bytes = renderer.render(result, attributes, market, comparables)
    """

    PAGE_WIDTH, PAGE_HEIGHT = A4
    MARGIN_LEFT = 20*mm
    MARGIN_RIGHT = 20*mm
    MARGIN_TOP = 30*mm
    MARGIN_BOTTOM = 22*mm

    def __init__(self):
        self.styles = get_report_styles()
        self._report_date = date.today()

    @property
    def content_width(self) -> float:
        return self.PAGE_WIDTH - self.MARGIN_LEFT - self.MARGIN_RIGHT

    def render(
        self,
        result: ValuationResult,
        attributes: Any,
        context: MarketContext,
        comparables: Sequence[ComparableAsset],
        distribution: Optional[PriceDistribution] = None,
        report_date: date = None,
        category: Optional[AssetCategory] = None,
    ) -> bytes:
        """
        Render the report and return the PDF bytes.

        Args:
            result: Priced estimate
            attributes: Attribute model (or plain mapping with ``category``)
            context: Market context for the asset's category and region
            comparables: Selected comparables, possibly empty
            distribution: Optional price distribution
            report_date: Date printed in the header (default: today)
            category: Required only when ``attributes`` is a plain mapping
        """
        if category is None:
            category = attributes.category
        values = attributes.to_dict() if hasattr(attributes, "to_dict") else dict(attributes)

        self._report_date = report_date or date.today()
        buffer = BytesIO()
        self._build_document(category, result, values, context, list(comparables), distribution, buffer)
        return buffer.getvalue()

    def _build_document(
        self,
        category: AssetCategory,
        result: ValuationResult,
        values: Dict[str, Any],
        context: MarketContext,
        comparables: List[ComparableAsset],
        distribution: Optional[PriceDistribution],
        buffer: BytesIO,
    ):
        title = report_title(category, values)
        doc = SimpleDocTemplate(
            buffer,
            pagesize=A4,
            leftMargin=self.MARGIN_LEFT,
            rightMargin=self.MARGIN_RIGHT,
            topMargin=self.MARGIN_TOP,
            bottomMargin=self.MARGIN_BOTTOM,
            title=f"{BRAND_NAME} {REPORT_SUBTITLE} - {title}",
            author=BRAND_NAME,
            subject=REPORT_SUBTITLE,
            invariant=1,
        )

        story = []
        story.extend(self._build_estimate_page(category, title, result, values))
        story.append(PageBreak())

        story.extend(self._build_market_section(context))
        story.extend(self._build_comparables_section(comparables, distribution))
        story.append(PageBreak())

        story.extend(self._build_methodology(category))

        doc.build(story, onFirstPage=self._draw_page_frame, onLaterPages=self._draw_page_frame)

    # =========================================================================
    # Page Drawing
    # =========================================================================

    def _draw_page_frame(self, canvas_obj: canvas.Canvas, doc):
        """Branded header band and footer on every page."""
        canvas_obj.saveState()

        top = self.PAGE_HEIGHT - 14*mm
        canvas_obj.setFillColor(Palette.ACCENT)
        canvas_obj.setFont('Helvetica-Bold', 16)
        canvas_obj.drawString(self.MARGIN_LEFT, top, BRAND_NAME)

        canvas_obj.setFillColor(Palette.GRAY)
        canvas_obj.setFont('Helvetica', 9)
        canvas_obj.drawString(self.MARGIN_LEFT, top - 5*mm, REPORT_SUBTITLE)
        canvas_obj.drawRightString(
            self.PAGE_WIDTH - self.MARGIN_RIGHT,
            top,
            self._report_date.strftime("%d.%m.%Y"),
        )

        canvas_obj.setStrokeColor(Palette.LIGHT_GRAY)
        canvas_obj.setLineWidth(0.5)
        canvas_obj.line(self.MARGIN_LEFT, top - 8*mm, self.PAGE_WIDTH - self.MARGIN_RIGHT, top - 8*mm)

        canvas_obj.setFont('Helvetica', 7)
        canvas_obj.drawCentredString(self.PAGE_WIDTH / 2, self.MARGIN_BOTTOM - 10*mm, FOOTER_TEXT)
        canvas_obj.drawRightString(
            self.PAGE_WIDTH - self.MARGIN_RIGHT,
            self.MARGIN_BOTTOM - 10*mm,
            f"{doc.page}",
        )

        canvas_obj.restoreState()

    # =========================================================================
    # Page 1: Estimate & Details
    # =========================================================================

    def _build_estimate_page(
        self,
        category: AssetCategory,
        title: str,
        result: ValuationResult,
        values: Dict[str, Any],
    ) -> list:
        elements = []

        elements.append(Paragraph(escape(title), self.styles['ReportTitle']))
        elements.append(Paragraph(CATEGORY_LABELS[category].upper(), self.styles['CategoryBadge']))
        elements.append(Spacer(1, 10*mm))

        range_text = (
            f"Bewertungsspanne: {format_currency(result.low, result.currency)} - "
            f"{format_currency(result.high, result.currency)}"
        )
        estimate_box = Table(
            [
                [Paragraph("Geschätzter Marktwert", self.styles['EstimateLabel'])],
                [Paragraph(format_currency(result.point_estimate, result.currency), self.styles['EstimateValue'])],
                [Paragraph(range_text, self.styles['EstimateRange'])],
                [Paragraph(f"Konfidenz: {round(result.confidence * 100)}%", self.styles['EstimateRange'])],
            ],
            colWidths=[self.content_width],
        )
        estimate_box.setStyle(TableStyle([
            ('BACKGROUND', (0, 0), (-1, -1), Palette.ACCENT_LIGHT),
            ('TOPPADDING', (0, 0), (-1, 0), 12),
            ('BOTTOMPADDING', (0, -1), (-1, -1), 12),
        ]))
        elements.append(estimate_box)
        elements.append(Spacer(1, 8*mm))

        rows = attribute_rows(category, values)
        if rows:
            elements.append(Paragraph("Objektdetails", self.styles['SectionTitle']))
            data = [["Merkmal", "Wert"]]
            data += [[label, Paragraph(escape(value), self.styles['TableCell'])] for label, value in rows]
            table = Table(data, colWidths=[self.content_width * 0.4, self.content_width * 0.6])
            table.setStyle(_table_style())
            elements.append(table)

        if result.rationale:
            elements.append(Paragraph("Wertbestimmende Faktoren", self.styles['SectionTitle']))
            for line in result.rationale:
                elements.append(Paragraph(f"• {escape(line)}", self.styles['BulletText']))

        return elements

    # =========================================================================
    # Page 2: Market Context & Comparables
    # =========================================================================

    def _build_market_section(self, context: MarketContext) -> list:
        elements = [Paragraph("Marktumfeld", self.styles['SectionTitle'])]
        cell = self.styles['TableCell']

        trend = context.trend
        sign = "-" if trend.direction == TrendDirection.DOWN else "+"
        trend_text = (
            f"<b>{TREND_LABELS[trend.direction]} ({sign}{format_percent(abs(trend.percentage))}, "
            f"{escape(trend.period)})</b><br/>{escape(trend.description)}"
        )

        sd = context.supply_demand
        sd_text = f"<b>{escape(sd.label)} ({DEMAND_LABELS[sd.status]})</b><br/>{escape(sd.description)}"
        if sd.active_listings:
            sd_text += f"<br/>Aktive Inserate: {sd.active_listings}"

        rows = [
            ["Region", Paragraph(escape(context.region), cell)] if context.region else None,
            ["Preistrend", Paragraph(trend_text, cell)],
            ["Angebot & Nachfrage", Paragraph(sd_text, cell)],
        ]
        if context.seasonal:
            s = context.seasonal
            rows.append(["Saisonalität", Paragraph(
                f"<b>{escape(s.current_month)}: {SEASONAL_LABELS[s.impact]}</b><br/>{escape(s.description)}",
                cell,
            )])
        if context.price_stats:
            p = context.price_stats
            rows.append(["Preisstatistik", Paragraph(
                f"Durchschnitt {format_currency(p.avg_price)} "
                f"(Spanne {format_currency(p.min_price)} - {format_currency(p.max_price)}, "
                f"{p.count} Inserate)",
                cell,
            )])
        rows.append(["Datenbasis", Paragraph(DATA_SOURCE_NOTES[context.data_source.value], cell)])

        table = Table(
            [row for row in rows if row],
            colWidths=[self.content_width * 0.3, self.content_width * 0.7],
        )
        table.setStyle(_table_style(header=False))
        elements.append(table)
        elements.append(Spacer(1, 6*mm))
        return elements

    def _build_comparables_section(
        self,
        comparables: List[ComparableAsset],
        distribution: Optional[PriceDistribution],
    ) -> list:
        elements = []
        cell = self.styles['TableCell']

        if comparables:
            elements.append(Paragraph("Vergleichsobjekte", self.styles['SectionTitle']))
            data = [["Objekt", "Standort", "Preis", "Ähnlichkeit"]]
            for comp in comparables:
                data.append([
                    Paragraph(escape(comp.title), cell),
                    Paragraph(escape(comp.location), cell) if comp.location else "",
                    format_currency(comp.price),
                    f"{comp.similarity_score}%",
                ])
            w = self.content_width
            table = Table(data, colWidths=[w * 0.42, w * 0.26, w * 0.18, w * 0.14])
            style = _table_style()
            style.add('ALIGN', (2, 0), (-1, -1), 'RIGHT')
            table.setStyle(style)
            elements.append(table)

        if distribution:
            rows = [
                ["Minimum", format_currency(distribution.min)],
                ["Median", format_currency(distribution.median)],
                ["Durchschnitt", format_currency(distribution.avg)],
                ["Maximum", format_currency(distribution.max)],
                ["Marktband", f"{format_currency(distribution.band.low)} - {format_currency(distribution.band.high)}"],
                ["Perzentil Ihrer Bewertung", f"{distribution.percentile_of_estimate}%"],
            ]
            table = Table(rows, colWidths=[self.content_width * 0.5, self.content_width * 0.5])
            style = _table_style(header=False)
            style.add('ALIGN', (1, 0), (1, -1), 'RIGHT')
            table.setStyle(style)
            elements.append(KeepTogether([
                Paragraph("Preisverteilung", self.styles['SectionTitle']),
                table,
            ]))

        return elements

    # =========================================================================
    # Page 3: Methodology, Factors, Disclaimer
    # =========================================================================

    def _build_methodology(self, category: AssetCategory) -> list:
        elements = []

        elements.append(Paragraph("Bewertungsmethodik", self.styles['SectionTitle']))
        elements.append(Paragraph(METHODOLOGY[category], self.styles['Body']))
        elements.append(Spacer(1, 6*mm))

        elements.append(Paragraph("Berücksichtigte Marktfaktoren", self.styles['SectionTitle']))
        for factor in MARKET_FACTORS:
            elements.append(Paragraph(f"• {factor}", self.styles['BulletText']))
        elements.append(Spacer(1, 8*mm))

        notice = Table(
            [
                [Paragraph(DISCLAIMER_TITLE, self.styles['NoticeTitle'])],
                [Paragraph(DISCLAIMER, self.styles['NoticeText'])],
            ],
            colWidths=[self.content_width],
        )
        notice.setStyle(TableStyle([
            ('BACKGROUND', (0, 0), (-1, -1), Palette.NOTICE_LIGHT),
            ('LEFTPADDING', (0, 0), (-1, -1), 10),
            ('RIGHTPADDING', (0, 0), (-1, -1), 10),
            ('TOPPADDING', (0, 0), (-1, 0), 10),
            ('BOTTOMPADDING', (0, -1), (-1, -1), 10),
        ]))
        elements.append(KeepTogether([notice]))

        return elements


def render_report(report, report_date: date = None) -> bytes:
    """Render a core.models.ValuationReport."""
    return ValuationReportRenderer().render(
        report.result,
        report.attributes,
        report.market,
        report.comparables,
        distribution=report.distribution,
        report_date=report_date,
        category=report.category,
    )
