from dashboards.network_health.sections.summary import render_summary_section
from dashboards.network_health.sections.charts import render_charts_section
from dashboards.network_health.sections.status import render_loading_section, render_error_section

__all__ = [
    "render_summary_section",
    "render_charts_section",
    "render_loading_section",
    "render_error_section",
]
