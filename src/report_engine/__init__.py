"""
Shortcode Report Engine - renders report templates with embedded shortcodes.

A report template is free-form markdown-like text in which ``[name]``
placeholders stand for text sections, charts or tables stored alongside
the report. The engine splits the template, resolves each placeholder
against the report content, and produces a flat list of typed render
nodes that any front end (or the bundled HTML renderer) can display.

Quick Start
-----------

    from report_engine import ContentMap, render_template

    content = ContentMap(text={"intro": {"content": "Hello **world**"}})
    nodes = render_template("## Title\\n[intro]\\n", content)

Public API Exports
------------------

Engine:
    tokenize: Split a template into literal and shortcode segments
    extract_shortcodes: Shortcode names in template order
    ContentMap: Per-render shortcode content (text, charts, tables)
    resolve_type: Namespace owning a shortcode name
    find_unresolved: Names without content
    render: Render one shortcode to a block node
    render_template: Render a whole template to a node list
    ReportRenderer: Renderer bound to a configuration

Shortcodes:
    make_shortcode: Build a ``[type_slug_index]`` shortcode
    inspect_template: Shortcode usage report for a template

Presentation:
    render_html: Serialize render nodes as an HTML fragment

Configuration:
    RenderConfig: Rendering configuration
    get_render_config: Cached configuration from YAML
"""

import importlib

__version__ = "1.0.0"

_EXPORTS = {
    "tokenize": "report_engine.engine.tokenizer",
    "extract_shortcodes": "report_engine.engine.tokenizer",
    "ContentMap": "report_engine.engine.content",
    "resolve_type": "report_engine.engine.resolver",
    "find_unresolved": "report_engine.engine.resolver",
    "render": "report_engine.engine.renderer",
    "render_template": "report_engine.engine.renderer",
    "ReportRenderer": "report_engine.engine.renderer",
    "make_shortcode": "report_engine.engine.shortcodes",
    "inspect_template": "report_engine.engine.shortcodes",
    "render_html": "report_engine.presentation.html",
    "RenderConfig": "report_engine.core.app_config",
    "get_render_config": "report_engine.core.app_config",
}


def __getattr__(name: str):
    """Lazy loading of exports to avoid circular imports."""
    module_name = _EXPORTS.get(name)
    if module_name is None:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    return getattr(importlib.import_module(module_name), name)


__all__ = list(_EXPORTS)
