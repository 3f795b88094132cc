"""
Output formatters.
"""

from cyclomatic.reporting.formatters import format_json, format_text, render_graph, render_text

__all__ = ["format_json", "format_text", "render_graph", "render_text"]
