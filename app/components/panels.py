"""
Recommendation and Operator Panels

Streamlit panels for the recommendation and operator pages:
- Recommendation cards with priority and expected impact
- Alarm list with acknowledge buttons
- Operator activity log
- Range-guard validation results
"""

import streamlit as st
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional


PRIORITY_COLORS = {
    "high": "#EF4444",
    "medium": "#FBBF24",
    "low": "#3B82F6",
}

SEVERITY_EMOJIS = {
    "critical": "🔴",
    "warning": "🟡",
    "info": "🔵",
    "error": "🔴",
    "success": "🟢",
}


def format_timestamp(epoch_ms: float) -> str:
    return datetime.fromtimestamp(epoch_ms / 1000).strftime("%Y-%m-%d %H:%M:%S")


# =========================================
# Recommendations Component
# =========================================

def render_recommendation_cards(
    recommendations: List[Dict[str, Any]],
    title: str = "🔧 Recommended Actions"
) -> None:
    """
    Render recommendation cards.

    Args:
        recommendations: List of dicts with title, description, impact, priority
        title: Section title
    """
    if not recommendations:
        return

    st.markdown(f"### {title}")

    for rec in recommendations:
        color = PRIORITY_COLORS.get(rec.get("priority"), PRIORITY_COLORS["low"])
        card_html = f"""
        <div style="
            padding: 14px 16px;
            margin-bottom: 10px;
            background: {color}10;
            border: 1px solid {color}40;
            border-left: 4px solid {color};
            border-radius: 0 10px 10px 0;
        ">
            <div style="display: flex; justify-content: space-between; align-items: center;">
                <span style="font-weight: 600; color: #F9FAFB;">{rec['title']}</span>
                <span style="
                    font-size: 0.75rem;
                    color: {color};
                    background: {color}20;
                    padding: 2px 8px;
                    border-radius: 4px;
                    text-transform: uppercase;
                ">{rec.get('priority', '')}</span>
            </div>
            <div style="color: #D1D5DB; font-size: 0.9rem; margin: 6px 0;">{rec['description']}</div>
            <div style="color: #10B981; font-size: 0.85rem;">📈 {rec['impact']}</div>
        </div>
        """
        st.markdown(card_html, unsafe_allow_html=True)


# =========================================
# Alarm List Component
# =========================================

def render_alarm_list(
    alarms: List[Dict[str, Any]],
    on_acknowledge: Optional[Callable[[str], None]] = None
) -> None:
    """
    Render the alarm list, unacknowledged alarms first.

    Args:
        alarms: List of alarm dicts
        on_acknowledge: Called with the alarm id when its button is pressed
    """
    if not alarms:
        st.info("No alarms")
        return

    for alarm in sorted(alarms, key=lambda a: a["acknowledged"]):
        emoji = SEVERITY_EMOJIS.get(alarm["severity"], "⚪")
        col1, col2 = st.columns([5, 1])

        with col1:
            text = (
                f"{emoji} **{alarm['message']}**  \n"
                f"{alarm['parameter']}: {alarm['value']} · {format_timestamp(alarm['timestamp'])}"
            )
            if alarm["acknowledged"]:
                st.caption(text.replace("**", ""))
            else:
                st.markdown(text)

        with col2:
            if not alarm["acknowledged"] and on_acknowledge is not None:
                if st.button("Acknowledge", key=f"ack_{alarm['id']}"):
                    on_acknowledge(alarm["id"])


# =========================================
# Activity Log Component
# =========================================

def render_activity_log(logs: List[Dict[str, Any]], limit: int = 10) -> None:
    """
    Render the newest operator log entries.

    Args:
        logs: Log entries, newest first
        limit: Number of entries shown
    """
    if not logs:
        st.info("No activity recorded")
        return

    for entry in logs[:limit]:
        emoji = SEVERITY_EMOJIS.get(entry["status"], "⚪")
        change = ""
        if entry.get("old_value") is not None and entry.get("new_value") is not None:
            change = f" ({entry['old_value']} → {entry['new_value']})"

        st.markdown(
            f"{emoji} **{entry['action']}**{change}  \n"
            f"<span style='color:#9CA3AF;font-size:0.8rem'>"
            f"{entry['user']} · {format_timestamp(entry['timestamp'])}</span>",
            unsafe_allow_html=True
        )


# =========================================
# Validation Result Component
# =========================================

def render_validation_result(result: Dict[str, Any]) -> None:
    """Render a range-guard validation result."""
    status = result.get("status", "unknown")
    if status == "accepted":
        st.success("✅ Values are within plant limits")
    elif status == "accepted_with_warnings":
        st.warning(f"⚠️ Accepted with {result.get('warning_count', 0)} warnings")
    else:
        st.error(f"🚫 Rejected with {result.get('error_count', 0)} errors")

    for issue in result.get("issues", []):
        emoji = SEVERITY_EMOJIS.get(issue.get("severity"), "⚪")
        st.markdown(f"{emoji} **{issue.get('rule_name')}**: {issue.get('message')}")
        if issue.get("recommendation"):
            st.caption(f"💡 {issue['recommendation']}")
