"""
KPI Card and Status Components

This module provides visual components for displaying single values
with context: KPI cards, the plant status badge, parameter summary
cards and alert banners.

These components are designed to provide at-a-glance understanding
of boiler performance.
"""

import streamlit as st
from typing import Optional, Tuple

from core.kpi import KPIThresholds


# =========================================
# Status Utilities
# =========================================

STATUS_CONFIG = {
    "optimal": {"color": "#10B981", "emoji": "🟢", "label": "Optimal"},
    "warning": {"color": "#FBBF24", "emoji": "🟡", "label": "Warning"},
    "critical": {"color": "#EF4444", "emoji": "🔴", "label": "Critical"},
    "unknown": {"color": "#6B7280", "emoji": "⚪", "label": "Unknown"},
}

TREND_ARROWS = {
    "up": ("↑", "#10B981"),
    "down": ("↓", "#EF4444"),
    "stable": ("→", "#9CA3AF"),
}


def get_status_config(status: str) -> dict:
    """Get color, emoji and label for a KPI status."""
    return STATUS_CONFIG.get((status or "unknown").lower(), STATUS_CONFIG["unknown"])


def get_kpi_status(
    metric_name: str,
    value: float,
    thresholds: Optional[KPIThresholds] = None
) -> Tuple[str, str]:
    """
    Get status and color of a single KPI value.

    Efficiency and CO₂ use the plant status thresholds; other
    metrics are shown neutral.

    Returns:
        Tuple of (status, color_hex)
    """
    t = thresholds or KPIThresholds()

    if metric_name == "efficiency":
        if value < t.critical_efficiency:
            status = "critical"
        elif value < t.warning_efficiency:
            status = "warning"
        else:
            status = "optimal"
    elif metric_name == "co2_emission":
        if value > t.critical_co2:
            status = "critical"
        elif value > t.warning_co2:
            status = "warning"
        else:
            status = "optimal"
    else:
        return "", "#3B82F6"

    return status, STATUS_CONFIG[status]["color"]


# =========================================
# KPI Card Component
# =========================================

def render_kpi_card(
    title: str,
    value: float,
    unit: str = "",
    metric_name: Optional[str] = None,
    decimals: int = 1,
    help_text: Optional[str] = None
) -> None:
    """
    Render a KPI card with value and optional status badge.

    Args:
        title: Card title
        value: Current value
        unit: Unit of measurement
        metric_name: Name for threshold lookup (neutral display if None)
        decimals: Decimal places shown
        help_text: Optional help tooltip text
    """
    status, color = get_kpi_status(metric_name, value) if metric_name else ("", "#3B82F6")

    status_html = ""
    if status:
        config = get_status_config(status)
        status_html = f"""
        <div style="
            display: inline-block;
            font-size: 0.75rem;
            color: {color};
            background: {color}20;
            padding: 2px 8px;
            border-radius: 4px;
            margin-top: 0.5rem;
        ">{config['emoji']} {config['label']}</div>
        """

    help_html = ""
    if help_text:
        help_html = f"""
        <span style="
            font-size: 0.75rem;
            color: #6B7280;
            cursor: help;
        " title="{help_text}">ⓘ</span>
        """

    card_html = f"""
    <div style="
        padding: 1rem;
        background: linear-gradient(135deg, rgba(31, 41, 55, 0.6), rgba(17, 24, 39, 0.8));
        border-radius: 10px;
        border: 1px solid #374151;
    ">
        <div style="
            font-size: 0.85rem;
            color: #9CA3AF;
            margin-bottom: 0.5rem;
            display: flex;
            justify-content: space-between;
            align-items: center;
        ">
            <span>{title}</span>
            {help_html}
        </div>
        <div style="
            font-size: 1.75rem;
            font-weight: bold;
            color: {color};
        ">{value:.{decimals}f} <span style="font-size: 1rem; color: #6B7280;">{unit}</span></div>
        {status_html}
    </div>
    """

    st.markdown(card_html, unsafe_allow_html=True)


# =========================================
# Status Indicator Component
# =========================================

def render_status_indicator(
    status: str,
    message: str = "",
    size: str = "medium"
) -> None:
    """
    Render a status indicator badge.

    Args:
        status: One of "optimal", "warning", "critical"
        message: Optional message to display
        size: "small", "medium", or "large"
    """
    config = get_status_config(status)

    sizes = {
        "small": {"font": "0.75rem", "padding": "2px 6px"},
        "medium": {"font": "0.875rem", "padding": "4px 10px"},
        "large": {"font": "1rem", "padding": "6px 14px"},
    }

    size_config = sizes.get(size, sizes["medium"])

    display_message = message if message else config["label"]

    indicator_html = f"""
    <div style="
        display: inline-flex;
        align-items: center;
        gap: 6px;
        font-size: {size_config['font']};
        color: {config['color']};
        background: {config['color']}20;
        padding: {size_config['padding']};
        border-radius: 6px;
        border: 1px solid {config['color']}40;
    ">
        <span>{config['emoji']}</span>
        <span>{display_message}</span>
    </div>
    """

    st.markdown(indicator_html, unsafe_allow_html=True)


# =========================================
# Summary Card Component
# =========================================

def render_summary_card(summary: dict) -> None:
    """
    Render the statistics card of one parameter.

    Args:
        summary: Dict with label, unit, target, avg, max, min, latest, trend
    """
    arrow, arrow_color = TREND_ARROWS.get(summary.get("trend"), TREND_ARROWS["stable"])
    unit = summary.get("unit", "")

    card_html = f"""
    <div style="
        padding: 0.9rem;
        background: rgba(31, 41, 55, 0.6);
        border-radius: 10px;
        border: 1px solid #374151;
        margin-bottom: 0.75rem;
    ">
        <div style="display: flex; justify-content: space-between; color: #9CA3AF; font-size: 0.85rem;">
            <span>{summary.get('label', summary.get('key'))}</span>
            <span>Target: {summary.get('target', '-')}</span>
        </div>
        <div style="font-size: 1.5rem; font-weight: bold; color: #F9FAFB; margin: 0.25rem 0;">
            {summary['latest']:.2f} <span style="font-size: 0.9rem; color: #6B7280;">{unit}</span>
            <span style="color: {arrow_color}; font-size: 1.1rem;">{arrow}</span>
        </div>
        <div style="font-size: 0.8rem; color: #9CA3AF;">
            avg {summary['avg']:.2f} · max {summary['max']:.2f} · min {summary['min']:.2f}
        </div>
    </div>
    """

    st.markdown(card_html, unsafe_allow_html=True)


# =========================================
# Alert Banner Component
# =========================================

def render_alert_banner(
    message: str,
    severity: str = "warning",
    icon: Optional[str] = None
) -> None:
    """
    Render an alert banner.

    Args:
        message: Alert message
        severity: "info", "warning", "error", or "success"
        icon: Optional custom icon
    """
    severity_config = {
        "info": {"color": "#3B82F6", "bg": "#1E3A5F", "icon": "ℹ️"},
        "warning": {"color": "#FBBF24", "bg": "#422006", "icon": "⚠️"},
        "error": {"color": "#EF4444", "bg": "#450A0A", "icon": "🚨"},
        "success": {"color": "#10B981", "bg": "#064E3B", "icon": "✅"},
    }

    config = severity_config.get(severity, severity_config["info"])
    display_icon = icon if icon else config["icon"]

    banner_html = f"""
    <div style="
        display: flex;
        align-items: center;
        gap: 12px;
        padding: 12px 16px;
        background: {config['bg']};
        border-left: 4px solid {config['color']};
        border-radius: 0 8px 8px 0;
        margin: 8px 0;
    ">
        <span style="font-size: 1.25rem;">{display_icon}</span>
        <span style="color: {config['color']}; font-size: 0.95rem;">{message}</span>
    </div>
    """

    st.markdown(banner_html, unsafe_allow_html=True)
