"""
Report rendering

Turns the structured results in kanban_metrics.domain.reports into text via
Jinja2 templates stored under kanban_metrics/templates/.
"""

from .renderer import get_jinja_environment, render_report

__all__ = ["get_jinja_environment", "render_report"]
