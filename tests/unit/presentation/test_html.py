"""Unit tests for the HTML presentation renderer."""

import json
from html import unescape

from report_engine.core.app_config import LabelsConfig, RenderConfig
from report_engine.engine.content import ContentMap
from report_engine.engine.inline import parse_inline
from report_engine.engine.nodes import Heading, ListItem, Paragraph, TextSpan
from report_engine.engine.renderer import render_template
from report_engine.presentation.html import render_html, render_inline, render_line


class TestRenderLine:
    """Tests for line and inline markup."""

    def test_heading(self) -> None:
        assert render_line(Heading(level=3, text="Sezione")) == "<h3>Sezione</h3>"

    def test_list_items(self) -> None:
        assert render_line(ListItem(text="a")) == '<li class="list-disc">a</li>'
        assert render_line(ListItem(ordered=True, text="b")) == '<li class="list-decimal">b</li>'

    def test_inline_markup(self) -> None:
        html = render_inline(parse_inline("**b** *i* `c` [l](/u) ![a](/img.png)"))
        assert html == (
            "<strong>b</strong> <em>i</em> <code>c</code> "
            '<a href="/u" target="_blank" rel="noopener noreferrer">l</a> '
            '<img src="/img.png" alt="a">'
        )

    def test_text_is_escaped(self) -> None:
        html = render_line(Paragraph(children=[TextSpan(text="<script>alert(1)</script>")]))
        assert "<script>" not in html
        assert "&lt;script&gt;" in html

    def test_attributes_are_escaped(self) -> None:
        html = render_inline(parse_inline('[x](/a"onmouseover="evil)'))
        assert 'href="/a&quot;onmouseover=&quot;evil"' in html


class TestRenderHtml:
    """Tests for full documents."""

    def test_wrapper_and_blocks(self, render_config: RenderConfig, sample_content: ContentMap) -> None:
        nodes = render_template("# Report\n[intro]\n[sales]\n[plan]", sample_content, render_config)
        html = render_html(nodes, render_config)
        assert html.startswith('<div class="shortcode-content">')
        assert "<h1>Report</h1>" in html
        assert '<div class="shortcode-section" data-shortcode="intro">' in html
        assert "<h3>Introduzione</h3>" in html
        assert 'class="chart chart-bar"' in html
        assert '<table class="table-progress">' in html
        assert '<td class="tone-positive">Completato</td>' in html

    def test_chart_payload_is_json(self, render_config: RenderConfig, sample_content: ContentMap) -> None:
        html = render_html(render_template("[sales]", sample_content, render_config), render_config)
        start = html.index('data-visual="') + len('data-visual="')
        payload = json.loads(unescape(html[start : html.index('"', start)]))
        assert payload["type"] == "bar"
        assert payload["points"][0] == {"name": "Q1", "2023": 10, "2024": 15}

    def test_placeholder_and_error(self, render_config: RenderConfig) -> None:
        content = ContentMap(charts={"bad": {"title": "x"}})
        html = render_html(render_template("[missing][bad]", content, render_config), render_config)
        assert "Contenuto non disponibile per lo shortcode: [missing]" in html
        assert "Errore nel rendering dello shortcode: [bad]" in html

    def test_prompt_note(self, render_config: RenderConfig) -> None:
        content = ContentMap(text={"s": {"content": "x", "prompt": "Scrivi <breve>"}})
        html = render_html(render_template("[s]", content, render_config), render_config)
        assert "Prompt specifico:" in html
        assert "Scrivi &lt;breve&gt;" in html

    def test_unsupported_chart_notice(self, render_config: RenderConfig) -> None:
        content = ContentMap(charts={"c": {"data": {"type": "scatter"}}})
        html = render_html(render_template("[c]", content, render_config), render_config)
        assert '<p class="chart-unsupported">Tipo di grafico non supportato</p>' in html

    def test_labels_from_config(self) -> None:
        config = RenderConfig(labels=LabelsConfig(placeholder="No content for"))
        html = render_html(render_template("[x]", ContentMap(), config), config)
        assert "No content for: [x]" in html

    def test_stats_cards(self, render_config: RenderConfig) -> None:
        content = ContentMap(tables={"k": {"data": {"type": "stats", "rows": [["Utenti", 1500]]}}})
        html = render_html(render_template("[k]", content, render_config), render_config)
        assert '<div class="stat-value">1.500</div>' in html
        assert '<div class="stat-caption">Utenti</div>' in html
