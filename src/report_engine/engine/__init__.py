"""
Engine Module
=============

Template tokenizing, shortcode resolution and node rendering.

Submodules are imported directly (``report_engine.engine.renderer`` etc.);
node models depend on the visualizers, which in turn read the content
models defined here.
"""
