"""
Dashboard Components Module

Reusable UI components for the Streamlit dashboard.

Components:
- charts: Plotly-based visualization components
- gauge: KPI cards and status badges
- panels: Recommendation, alarm and activity panels
"""

from .charts import (
    create_parameter_trend_chart,
    create_multi_parameter_chart,
    create_correlation_heatmap,
    create_model_comparison_chart,
    create_gauge_chart,
)
from .gauge import (
    render_kpi_card,
    render_status_indicator,
    render_summary_card,
    render_alert_banner,
)
from .panels import (
    render_recommendation_cards,
    render_alarm_list,
    render_activity_log,
    render_validation_result,
)

__all__ = [
    # Charts
    "create_parameter_trend_chart",
    "create_multi_parameter_chart",
    "create_correlation_heatmap",
    "create_model_comparison_chart",
    "create_gauge_chart",

    # Gauge
    "render_kpi_card",
    "render_status_indicator",
    "render_summary_card",
    "render_alert_banner",

    # Panels
    "render_recommendation_cards",
    "render_alarm_list",
    "render_activity_log",
    "render_validation_result",
]
