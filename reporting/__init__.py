"""
Reporting module for the ASSERO valuation engine.

Renders valuation results into printable PDF reports.

Usage:
    from reporting import ValuationReportRenderer

    renderer = ValuationReportRenderer()
    pdf_bytes = renderer.render(result, attributes, market, comparables)
"""

from .pdf_generator import ValuationReportRenderer, render_report, get_report_styles
from .schemas import (
    ATTRIBUTE_LABELS,
    DISCLAIMER,
    MARKET_FACTORS,
    METHODOLOGY,
    attribute_rows,
    is_blank,
    report_title,
)

__all__ = [
    "ValuationReportRenderer",
    "render_report",
    "get_report_styles",
    "ATTRIBUTE_LABELS",
    "DISCLAIMER",
    "MARKET_FACTORS",
    "METHODOLOGY",
    "attribute_rows",
    "is_blank",
    "report_title",
]
