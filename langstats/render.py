"""
Presentation of a normalized language report.

No arithmetic happens here beyond layout positions.
"""

from __future__ import annotations

import math
from html import escape
from typing import Callable, Dict

from .models import LanguageReport
from .rules import PROJECT_URL

SVG_WIDTH = 400
SVG_COLUMNS = 3
SVG_ROW_HEIGHT = 20

MEDIA_TYPES = {
    "text": "text/plain; charset=utf-8",
    "html": "text/html; charset=utf-8",
    "svg": "image/svg+xml; charset=utf-8",
}


def format_percentage(value: float) -> str:
    """57.20 -> '57.2', 100.00 -> '100', 0.01 -> '0.01'"""
    return f"{value:.2f}".rstrip("0").rstrip(".")


def _footer(report: LanguageReport) -> str:
    return (
        f"Based on {report.total_repos} repositories for "
        f"{report.display_name} ({report.username})"
    )


def render_text_block(report: LanguageReport) -> str:
    lines = [
        f"{format_percentage(item.percentage)}% {item.language}"
        for item in report.languages
    ]
    footer = (
        f"*{_footer(report)}<br/>"
        f"Powered by [carolyn-sun/simple-lang-stats]({PROJECT_URL})*"
    )
    return "```\n" + "\n".join(lines) + "\n```\n" + footer


def render_html_table(report: LanguageReport) -> str:
    rows = "\n".join(
        f"    <tr><td>{escape(item.language)}</td>"
        f"<td>{format_percentage(item.percentage)}%</td></tr>"
        for item in report.languages
    )
    return (
        "<table>\n"
        f"  <caption>{escape(_footer(report))}</caption>\n"
        "  <thead>\n"
        "    <tr><th>Language</th><th>Percentage</th></tr>\n"
        "  </thead>\n"
        "  <tbody>\n"
        f"{rows}\n"
        "  </tbody>\n"
        "</table>"
    )


def render_svg(report: LanguageReport) -> str:
    count = len(report.languages)
    height = max(120, math.ceil(count / SVG_COLUMNS) * SVG_ROW_HEIGHT + 80)
    col_width = SVG_WIDTH / SVG_COLUMNS

    parts = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        f'<svg width="{SVG_WIDTH}" height="{height}" '
        f'viewBox="0 0 {SVG_WIDTH} {height}" xmlns="http://www.w3.org/2000/svg">',
        "  <style>",
        "    .title { font: bold 16px -apple-system, BlinkMacSystemFont, 'Segoe UI', "
        "'Noto Sans', Helvetica, Arial, sans-serif; fill: #24292f; }",
        "    .lang { font: 12px ui-monospace, SFMono-Regular, 'SF Mono', Consolas, "
        "'Liberation Mono', Menlo, monospace; fill: #24292f; }",
        "    .footer { font: 10px -apple-system, BlinkMacSystemFont, 'Segoe UI', "
        "'Noto Sans', Helvetica, Arial, sans-serif; fill: #656d76; }",
        "  </style>",
        f'  <rect width="{SVG_WIDTH}" height="{height}" fill="#ffffff" '
        'stroke="#d0d7de" stroke-width="1" rx="6"/>',
        '  <text x="12" y="25" class="title">Most Used Langs</text>',
    ]

    for index, item in enumerate(report.languages):
        x = 12 + (index % SVG_COLUMNS) * col_width
        y = 50 + (index // SVG_COLUMNS) * SVG_ROW_HEIGHT
        parts.append(
            f'  <text x="{x:g}" y="{y}" class="lang">'
            f"{escape(item.language)} {format_percentage(item.percentage)}%</text>"
        )

    parts.append(
        f'  <text x="12" y="{height - 15}" class="footer">'
        f"{escape(_footer(report))}</text>"
    )
    parts.append("</svg>")
    return "\n".join(parts)


RENDERERS: Dict[str, Callable[[LanguageReport], str]] = {
    "text": render_text_block,
    "html": render_html_table,
    "svg": render_svg,
}


def render(report: LanguageReport, fmt: str = "text") -> str:
    try:
        renderer = RENDERERS[fmt]
    except KeyError:
        raise ValueError(f"Unknown output format: {fmt}") from None
    return renderer(report)
