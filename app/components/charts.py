"""
Chart Components for Dashboard

This module provides Plotly-based chart components for visualizing
boiler telemetry, parameter correlation and model predictions.

All charts are designed to be:
- Responsive and interactive
- Consistent in styling
- Color-coded for quick interpretation
"""

import plotly.graph_objects as go
from typing import List, Dict, Any, Optional
from datetime import datetime

from core.kpi import KPIThresholds


# =========================================
# Color Schemes
# =========================================

COLORS = {
    "optimal": "#10B981",    # Green
    "warning": "#FBBF24",    # Yellow
    "critical": "#EF4444",   # Red
    "primary": "#3B82F6",    # Blue
    "secondary": "#6B7280",  # Gray
    "background": "#1F2937", # Dark gray
    "text": "#F9FAFB",       # Light text
    "grid": "#374151",       # Grid lines
}

STATUS_COLORS = {
    "optimal": COLORS["optimal"],
    "warning": COLORS["warning"],
    "critical": COLORS["critical"],
}


def hex_to_rgba(hex_color: str, alpha: float) -> str:
    """Convert '#RRGGBB' to an rgba() string."""
    hex_color = hex_color.lstrip("#")
    r, g, b = (int(hex_color[i:i + 2], 16) for i in (0, 2, 4))
    return f"rgba({r}, {g}, {b}, {alpha})"


def parse_target_band(target: str) -> Optional[List[float]]:
    """
    Parse a target band such as "535-540" into [low, high].

    Returns None for open-ended targets like "<200".
    """
    parts = target.split("-")
    if len(parts) != 2:
        return None
    try:
        return [float(parts[0]), float(parts[1])]
    except ValueError:
        return None


# =========================================
# Chart Layout Defaults
# =========================================

def get_default_layout(title: str = "", height: int = 400) -> dict:
    """Get default chart layout settings."""
    return {
        "title": {
            "text": title,
            "font": {"size": 16, "color": COLORS["text"]},
            "x": 0.5,
            "xanchor": "center"
        },
        "paper_bgcolor": "rgba(0,0,0,0)",
        "plot_bgcolor": "rgba(0,0,0,0)",
        "height": height,
        "margin": {"l": 60, "r": 40, "t": 60, "b": 60},
        "font": {"color": COLORS["text"], "size": 12},
        "xaxis": {
            "gridcolor": COLORS["grid"],
            "showgrid": True,
            "zeroline": False,
        },
        "yaxis": {
            "gridcolor": COLORS["grid"],
            "showgrid": True,
            "zeroline": False,
        },
        "legend": {
            "bgcolor": "rgba(0,0,0,0.5)",
            "bordercolor": COLORS["grid"],
            "font": {"color": COLORS["text"]}
        },
        "hovermode": "x unified",
    }


# =========================================
# Parameter Trend Chart
# =========================================

def create_parameter_trend_chart(
    times: List[datetime],
    values: List[float],
    label: str,
    unit: str = "",
    target: Optional[str] = None,
    color: Optional[str] = None,
    thresholds: Optional[Dict[str, float]] = None,
    height: int = 300
) -> go.Figure:
    """
    Create a trend chart for a single parameter.

    Args:
        times: List of timestamps
        values: List of parameter values
        label: Display name of the parameter
        unit: Unit of measurement
        target: Optional target band, shaded when it is a "low-high" range
        color: Line color (defaults to primary blue)
        thresholds: Optional dict with 'warning' and 'critical' lines
        height: Chart height in pixels

    Returns:
        Plotly Figure object
    """
    line_color = color or COLORS["primary"]
    fig = go.Figure()

    band = parse_target_band(target) if target else None
    if band:
        fig.add_hrect(
            y0=band[0], y1=band[1],
            fillcolor=COLORS["optimal"],
            opacity=0.1,
            line_width=0,
            annotation_text="Target",
            annotation_position="right",
            annotation_font_size=10,
            annotation_font_color=COLORS["optimal"],
        )

    if thresholds:
        if "warning" in thresholds:
            fig.add_hline(
                y=thresholds["warning"],
                line_dash="dash",
                line_color=COLORS["warning"],
                annotation_text="Warning",
                annotation_position="right"
            )
        if "critical" in thresholds:
            fig.add_hline(
                y=thresholds["critical"],
                line_dash="dash",
                line_color=COLORS["critical"],
                annotation_text="Critical",
                annotation_position="right"
            )

    fig.add_trace(go.Scatter(
        x=times,
        y=values,
        mode="lines",
        name=label,
        line={"color": line_color, "width": 2},
        fill="tozeroy",
        fillcolor=hex_to_rgba(line_color, 0.1),
        hovertemplate=f"<b>%{{y:.2f}}</b> {unit}<br>%{{x}}<extra></extra>"
    ))

    layout = get_default_layout(label, height)
    layout["yaxis"]["title"] = f"{label} ({unit})" if unit else label
    layout["xaxis"]["title"] = "Time"
    layout["showlegend"] = False

    # Zoom onto the data instead of the zero baseline of the fill
    if values:
        span = max(values) - min(values)
        padding = span * 0.2 or 1.0
        low, high = min(values) - padding, max(values) + padding
        if band:
            low, high = min(low, band[0]), max(high, band[1])
        layout["yaxis"]["range"] = [low, high]

    fig.update_layout(**layout)

    return fig


# =========================================
# Multi-Parameter Chart
# =========================================

def create_multi_parameter_chart(
    times: List[datetime],
    series: Dict[str, List[float]],
    colors: Optional[Dict[str, str]] = None,
    title: str = "Process Parameters",
    height: int = 400
) -> go.Figure:
    """
    Create a chart with several parameters on a shared time axis.

    Args:
        times: List of timestamps
        series: Dict mapping display labels to value lists
        colors: Optional dict mapping labels to line colors
        title: Chart title
        height: Chart height in pixels

    Returns:
        Plotly Figure object
    """
    colors = colors or {}
    fig = go.Figure()

    for label, values in series.items():
        fig.add_trace(go.Scatter(
            x=times,
            y=values,
            mode="lines",
            name=label,
            line={"color": colors.get(label, COLORS["primary"]), "width": 2},
            hovertemplate=f"<b>{label}</b>: %{{y:.2f}}<br>%{{x}}<extra></extra>"
        ))

    layout = get_default_layout(title, height)
    layout["xaxis"]["title"] = "Time"
    layout["legend"]["orientation"] = "h"
    layout["legend"]["yanchor"] = "bottom"
    layout["legend"]["y"] = 1.02
    layout["legend"]["xanchor"] = "center"
    layout["legend"]["x"] = 0.5

    fig.update_layout(**layout)

    return fig


# =========================================
# Correlation Heat Map
# =========================================

def create_correlation_heatmap(
    keys: List[str],
    matrix: Dict[str, Dict[str, float]],
    labels: Optional[Dict[str, str]] = None,
    title: str = "Parameter Correlation",
    height: int = 500
) -> go.Figure:
    """
    Create a heat map of pairwise Pearson correlation.

    Args:
        keys: Parameter keys in display order
        matrix: Nested dict, matrix[a][b] is the correlation of a and b
        labels: Optional dict mapping keys to display names
        title: Chart title
        height: Chart height in pixels

    Returns:
        Plotly Figure object
    """
    labels = labels or {}
    names = [labels.get(k, k.replace("_", " ").title()) for k in keys]
    z = [[matrix[a][b] for b in keys] for a in keys]

    fig = go.Figure(go.Heatmap(
        z=z,
        x=names,
        y=names,
        zmin=-1,
        zmax=1,
        colorscale="RdBu",
        reversescale=True,
        text=[[f"{v:.2f}" for v in row] for row in z],
        texttemplate="%{text}",
        hovertemplate="<b>%{y}</b> vs <b>%{x}</b><br>r = %{z:.3f}<extra></extra>"
    ))

    layout = get_default_layout(title, height)
    layout["xaxis"]["showgrid"] = False
    layout["yaxis"]["showgrid"] = False
    layout["yaxis"]["autorange"] = "reversed"
    layout["hovermode"] = "closest"

    fig.update_layout(**layout)

    return fig


# =========================================
# Model Comparison Chart (Bar)
# =========================================

def create_model_comparison_chart(
    predictions: List[Dict[str, Any]],
    metric: str = "accuracy",
    title: str = "Model Accuracy",
    unit: str = "%",
    selected: Optional[str] = None,
    height: int = 300
) -> go.Figure:
    """
    Create a bar chart comparing one metric across model predictions.

    Args:
        predictions: List of prediction dicts with 'model' and the metric
        metric: Key of the metric to compare
        title: Chart title
        unit: Unit shown on the bars
        selected: Model to highlight
        height: Chart height in pixels

    Returns:
        Plotly Figure object
    """
    if not predictions:
        fig = go.Figure()
        fig.add_annotation(
            text="No data available",
            xref="paper", yref="paper",
            x=0.5, y=0.5,
            showarrow=False,
            font={"size": 16, "color": COLORS["secondary"]}
        )
        fig.update_layout(**get_default_layout(title, height))
        return fig

    models = [p["model"] for p in predictions]
    values = [p[metric] for p in predictions]
    colors = [
        COLORS["optimal"] if m == selected else COLORS["primary"]
        for m in models
    ]

    fig = go.Figure(go.Bar(
        x=models,
        y=values,
        marker_color=colors,
        text=[f"{v:.1f}{unit}" for v in values],
        textposition="auto",
        hovertemplate="<b>%{x}</b><br>%{y:.2f}<extra></extra>"
    ))

    layout = get_default_layout(title, height)
    layout["yaxis"]["range"] = [min(values) * 0.95, max(values) * 1.02]
    layout["yaxis"]["title"] = f"{metric.replace('_', ' ').title()} ({unit})"
    layout["showlegend"] = False
    layout["hovermode"] = "closest"

    fig.update_layout(**layout)

    return fig


# =========================================
# Gauge Chart
# =========================================

def create_gauge_chart(
    value: float,
    title: str = "Efficiency",
    min_val: float = 80,
    max_val: float = 95,
    warning: float = KPIThresholds.warning_efficiency,
    critical: float = KPIThresholds.critical_efficiency,
    suffix: str = "%",
    height: int = 250
) -> go.Figure:
    """
    Create a gauge for a value where lower is worse (e.g. efficiency).

    Args:
        value: Current value to display
        title: Chart title
        min_val: Minimum value on gauge
        max_val: Maximum value on gauge
        warning: Values below this are shaded as warning
        critical: Values below this are shaded as critical
        suffix: Unit suffix on the number
        height: Chart height in pixels

    Returns:
        Plotly Figure object
    """
    if value < critical:
        color = COLORS["critical"]
    elif value < warning:
        color = COLORS["warning"]
    else:
        color = COLORS["optimal"]

    fig = go.Figure(go.Indicator(
        mode="gauge+number",
        value=value,
        title={"text": title, "font": {"size": 16, "color": COLORS["text"]}},
        number={"font": {"size": 40, "color": COLORS["text"]}, "suffix": suffix},
        gauge={
            "axis": {
                "range": [min_val, max_val],
                "tickwidth": 1,
                "tickcolor": COLORS["text"],
                "tickfont": {"color": COLORS["text"]}
            },
            "bar": {"color": color, "thickness": 0.75},
            "bgcolor": COLORS["background"],
            "borderwidth": 2,
            "bordercolor": COLORS["grid"],
            "steps": [
                {"range": [min_val, critical], "color": "rgba(239, 68, 68, 0.3)"},
                {"range": [critical, warning], "color": "rgba(251, 191, 36, 0.3)"},
                {"range": [warning, max_val], "color": "rgba(16, 185, 129, 0.3)"},
            ],
            "threshold": {
                "line": {"color": COLORS["text"], "width": 2},
                "thickness": 0.75,
                "value": value
            }
        }
    ))

    fig.update_layout(
        paper_bgcolor="rgba(0,0,0,0)",
        plot_bgcolor="rgba(0,0,0,0)",
        font={"color": COLORS["text"]},
        height=height,
        margin={"l": 30, "r": 30, "t": 60, "b": 30}
    )

    return fig
