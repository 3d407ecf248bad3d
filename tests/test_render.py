import pytest

from langstats.models import LanguageReport, LanguageShare
from langstats.render import (
    format_percentage,
    render,
    render_html_table,
    render_svg,
    render_text_block,
)


def make_report(*shares):
    return LanguageReport(
        username="octocat",
        display_name="The Octocat",
        total_repos=8,
        languages=[
            LanguageShare(language=lang, size=1, percentage=pct) for lang, pct in shares
        ],
    )


@pytest.mark.parametrize(
    "value, expected",
    [(57.2, "57.2"), (100.0, "100"), (0.01, "0.01"), (10.0, "10"), (33.34, "33.34")],
)
def test_format_percentage(value, expected):
    assert format_percentage(value) == expected


def test_text_block():
    report = make_report(("Python", 57.2), ("Go", 42.8))
    assert render_text_block(report) == (
        "```\n"
        "57.2% Python\n"
        "42.8% Go\n"
        "```\n"
        "*Based on 8 repositories for The Octocat (octocat)<br/>"
        "Powered by [carolyn-sun/simple-lang-stats](https://github.com/carolyn-sun/simple-lang-stats)*"
    )


def test_html_table_escapes_names():
    html = render_html_table(make_report(("C<++>", 100.0)))
    assert "<td>C&lt;++&gt;</td><td>100%</td>" in html
    assert "<caption>Based on 8 repositories for The Octocat (octocat)</caption>" in html


def test_svg_minimum_height():
    svg = render_svg(make_report(("A", 50.0), ("B", 50.0)))
    assert svg.startswith('<?xml version="1.0" encoding="UTF-8"?>')
    assert 'height="120"' in svg
    assert '<text x="12" y="105" class="footer">' in svg


def test_svg_grows_with_rows():
    shares = [(f"L{i}", 0.01) for i in range(6)] + [("Last", 99.94)]
    svg = render_svg(make_report(*shares))
    # three rows of languages
    assert 'height="140"' in svg
    assert '<text x="12" y="90" class="lang">Last 99.94%</text>' in svg


def test_render_dispatch():
    report = make_report(("Rust", 100.0))
    assert render(report, "text") == render_text_block(report)
    assert render(report, "svg") == render_svg(report)
    with pytest.raises(ValueError):
        render(report, "pdf")
