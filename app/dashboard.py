"""
Boiler Cofiring Monitor - Streamlit Dashboard

Main dashboard application for monitoring the cofiring boiler,
visualizing trends and operating the control panel.

Features:
- Login gate with the demo accounts
- Live KPI cards with automatic refresh
- Parameter detail view (24h / 7d / 30d) with statistics, trends,
  data table, CSV export and correlation heat map
- Model predictions and operating recommendations
- Operator control panel with alarms and activity log

Run with: streamlit run app/dashboard.py
"""

import os
import streamlit as st
import requests
import pandas as pd
from typing import Dict, Any, Optional, Tuple

from core.kpi import KPIThresholds

# Import components
from components.charts import (
    create_parameter_trend_chart,
    create_multi_parameter_chart,
    create_correlation_heatmap,
    create_model_comparison_chart,
    create_gauge_chart,
)
from components.gauge import (
    render_kpi_card,
    render_status_indicator,
    render_summary_card,
    render_alert_banner,
)
from components.panels import (
    render_recommendation_cards,
    render_alarm_list,
    render_activity_log,
    render_validation_result,
)


# =========================================
# Configuration
# =========================================

API_URL = os.getenv("API_URL", "http://localhost:8000")
REFRESH_SECONDS = float(os.getenv("DASHBOARD_REFRESH_SECONDS", 3))
ACTIVITY_TICK_SECONDS = 15

TIME_RANGES = {
    "24 Hours": 24,
    "7 Days": 168,
    "30 Days": 720,
}

_thresholds = KPIThresholds()
KPI_THRESHOLDS = {
    "efficiency": {
        "warning": _thresholds.warning_efficiency,
        "critical": _thresholds.critical_efficiency,
    },
    "co2_emission": {
        "warning": _thresholds.warning_co2,
        "critical": _thresholds.critical_co2,
    },
}

# Page configuration
st.set_page_config(
    page_title="Boiler Cofiring Monitor",
    page_icon="🔥",
    layout="wide",
    initial_sidebar_state="expanded"
)

# Custom CSS
st.markdown("""
<style>
    .main .block-container {
        padding-top: 2rem;
        padding-bottom: 2rem;
    }

    h1, h2, h3 {
        color: #F9FAFB !important;
    }

    [data-testid="stMetric"] {
        background: rgba(31, 41, 55, 0.6);
        border-radius: 10px;
        padding: 15px;
        border: 1px solid #374151;
    }

    [data-testid="stSidebar"] {
        background: linear-gradient(180deg, #1F2937 0%, #111827 100%);
    }

    .stButton > button {
        background: linear-gradient(90deg, #3B82F6, #2563EB);
        color: white;
        border: none;
        border-radius: 8px;
        font-weight: 600;
    }

    #MainMenu {visibility: hidden;}
    footer {visibility: hidden;}
</style>
""", unsafe_allow_html=True)


# =========================================
# API Helper Functions
# =========================================

@st.cache_data(ttl=30)
def fetch_api(endpoint: str) -> Optional[Dict[str, Any]]:
    """Fetch data from API with caching."""
    try:
        response = requests.get(f"{API_URL}{endpoint}", timeout=10)
        response.raise_for_status()
        return response.json()
    except requests.exceptions.RequestException as e:
        st.error(f"API Error: {e}")
        return None


def get_live(endpoint: str) -> Optional[Dict[str, Any]]:
    """Fetch data that must not be cached (live samples, console state)."""
    status_code, payload = call_api("GET", endpoint)
    return payload if status_code == 200 else None


def call_api(
    method: str,
    endpoint: str,
    data: Optional[Dict[str, Any]] = None
) -> Tuple[Optional[int], Optional[Any]]:
    """
    Send a request and return (status_code, json_body).

    Error responses are returned rather than raised so pages can show
    validation details. Connection failures return (None, None).
    """
    try:
        response = requests.request(method, f"{API_URL}{endpoint}", json=data, timeout=10)
    except requests.exceptions.RequestException as e:
        st.error(f"API Error: {e}")
        return None, None

    try:
        payload = response.json()
    except ValueError:
        payload = None

    if response.status_code >= 500:
        st.error(f"API Error: {response.status_code}")

    return response.status_code, payload


def fetch_csv(hours: float) -> Optional[str]:
    """Download a series as CSV text."""
    try:
        response = requests.get(
            f"{API_URL}/api/v1/telemetry/series/export",
            params={"hours": hours},
            timeout=10
        )
        response.raise_for_status()
        return response.text
    except requests.exceptions.RequestException as e:
        st.error(f"API Error: {e}")
        return None


def check_api_health() -> bool:
    """Check if API is available."""
    try:
        response = requests.get(f"{API_URL}/health", timeout=5)
        return response.status_code == 200
    except requests.exceptions.RequestException:
        return False


def series_frame(series: Dict[str, Any]) -> pd.DataFrame:
    """Turn a series response into a DataFrame indexed by time."""
    df = pd.DataFrame(series["samples"])
    df["time"] = pd.to_datetime(df["timestamp"], unit="ms")
    return df


def current_user_name() -> str:
    user = st.session_state.get("user") or {}
    return user.get("name", "Current Operator")


# =========================================
# Login Page
# =========================================

def render_login_page():
    """Render the login form."""
    col1, col2, col3 = st.columns([1, 2, 1])

    with col2:
        st.title("🔥 Boiler Cofiring Monitor")
        st.markdown("Sign in to continue.")

        with st.form("login_form"):
            username = st.text_input("Username")
            password = st.text_input("Password", type="password")
            submitted = st.form_submit_button("Sign In", type="primary")

        if submitted:
            status_code, payload = call_api(
                "POST", "/api/v1/auth/login",
                {"username": username, "password": password}
            )

            if status_code == 200:
                st.session_state["authenticated"] = True
                st.session_state["user"] = payload["user"]
                st.session_state["token"] = payload["token"]
                st.rerun()
            elif status_code in (401, 422):
                st.error("Invalid username or password")

        with st.expander("Demo accounts"):
            st.markdown("- `admin` / `admin123`\n- `operator` / `operator123`")


# =========================================
# Sidebar
# =========================================

def render_sidebar() -> str:
    """Render the sidebar and return the selected page."""
    with st.sidebar:
        st.markdown("## 🔥 Cofiring Monitor")

        user = st.session_state.get("user") or {}
        st.caption(f"Signed in as **{user.get('name', '?')}** ({user.get('role', '?')})")

        st.markdown("---")

        # API Status
        if check_api_health():
            st.success("🟢 API Connected")
        else:
            st.error("🔴 API Disconnected")
            st.info(f"API URL: {API_URL}")

        st.markdown("---")
        st.subheader("📍 Navigation")

        page = st.radio(
            "Go to",
            ["📊 Home", "📈 Parameter Detail", "🤖 Recommendations", "🎛️ Operator"],
            label_visibility="collapsed"
        )

        st.markdown("---")

        if st.button("🔄 Refresh Data", use_container_width=True):
            st.cache_data.clear()
            st.rerun()

        if st.button("🚪 Sign Out", use_container_width=True):
            for key in ("authenticated", "user", "token"):
                st.session_state.pop(key, None)
            st.rerun()

    return page


# =========================================
# Home Page
# =========================================

@st.fragment(run_every=REFRESH_SECONDS)
def render_live_kpi():
    """KPI cards, redrawn every refresh interval."""
    kpi = get_live("/api/v1/telemetry/kpi")

    if not kpi:
        render_alert_banner("No live data available. Is the API running?", severity="error")
        return

    col1, col2 = st.columns([1, 3])

    with col1:
        st.plotly_chart(
            create_gauge_chart(kpi["efficiency"], title="Boiler Efficiency"),
            use_container_width=True
        )
        render_status_indicator(kpi["status"], size="large")

    with col2:
        st.markdown("### ⚡ Key Performance Indicators")

        row1 = st.columns(3)
        with row1[0]:
            render_kpi_card("Efficiency", kpi["efficiency"], "%", metric_name="efficiency")
        with row1[1]:
            render_kpi_card(
                "CO₂ Emission", kpi["co2_emission"], "mg/Nm³",
                metric_name="co2_emission", decimals=0
            )
        with row1[2]:
            render_kpi_card("Cofiring Ratio", kpi["cofiring_ratio"], "%")

        st.markdown("")

        row2 = st.columns(3)
        with row2[0]:
            render_kpi_card("Steam Temperature", kpi["steam_temp"], "°C")
        with row2[1]:
            render_kpi_card("Drum Pressure", kpi["drum_pressure"], "bar")
        with row2[2]:
            render_kpi_card("Unit Load", kpi["load_unit"], "MW", decimals=0)

        for reason in kpi.get("reasons", []):
            render_alert_banner(reason, severity="error" if kpi["status"] == "critical" else "warning")

    st.caption(f"Refreshing every {REFRESH_SECONDS:g}s")


def render_home_page():
    """Render the live monitoring page."""
    st.title("📊 Real-Time Monitoring")

    render_live_kpi()

    st.markdown("---")
    st.markdown("### 📈 Last 24 Hours")

    series = fetch_api("/api/v1/telemetry/series?hours=24")
    if not series:
        st.info("No trend data available")
        return

    df = series_frame(series)

    col1, col2 = st.columns(2)
    with col1:
        st.plotly_chart(
            create_parameter_trend_chart(
                df["time"], df["efficiency"].tolist(), "Efficiency", "%",
                thresholds=KPI_THRESHOLDS["efficiency"], color="#8b5cf6"
            ),
            use_container_width=True
        )
    with col2:
        st.plotly_chart(
            create_parameter_trend_chart(
                df["time"], df["co2_emission"].tolist(), "CO₂ Emission", "mg/Nm³",
                thresholds=KPI_THRESHOLDS["co2_emission"], color="#ef4444"
            ),
            use_container_width=True
        )


# =========================================
# Parameter Detail Page
# =========================================

def render_detail_page():
    """Render the parameter detail page."""
    st.title("📈 Parameter Detail")

    col1, col2 = st.columns([1, 2])
    with col1:
        time_range = st.selectbox("Time Range", options=list(TIME_RANGES.keys()), index=0)
    with col2:
        search = st.text_input("Search parameters", placeholder="e.g. temperature")

    hours = TIME_RANGES[time_range]

    series = fetch_api(f"/api/v1/telemetry/series?hours={hours}")
    summary = fetch_api(
        f"/api/v1/telemetry/summary?hours={hours}&search={requests.utils.quote(search)}"
    )
    parameters = fetch_api("/api/v1/telemetry/parameters")

    if not series or not summary:
        render_alert_banner("Could not load series data from the API", severity="error")
        return

    df = series_frame(series)
    summaries = summary["parameters"]
    specs = {p["key"]: p for p in parameters or []}

    st.caption(
        f"{series['point_count']} points over {hours} h "
        f"({series['points_per_hour']:.2f} points per hour)"
    )

    # Summary cards
    st.markdown("### 📋 Summary")
    if not summaries:
        st.info(f"No parameter matches '{search}'")
    else:
        cols = st.columns(3)
        for i, item in enumerate(summaries):
            with cols[i % 3]:
                render_summary_card(item)

    st.markdown("---")

    # Trend charts
    st.markdown("### 📈 Trends")
    tab1, tab2 = st.tabs(["Individual", "Combined"])

    with tab1:
        cols = st.columns(2)
        for i, item in enumerate(summaries):
            spec = specs.get(item["key"], {})
            with cols[i % 2]:
                st.plotly_chart(
                    create_parameter_trend_chart(
                        df["time"], df[item["key"]].tolist(), item["label"], item["unit"],
                        target=item["target"], color=spec.get("color"),
                        thresholds=KPI_THRESHOLDS.get(item["key"])
                    ),
                    use_container_width=True
                )

    with tab2:
        st.plotly_chart(
            create_multi_parameter_chart(
                df["time"],
                {item["label"]: df[item["key"]].tolist() for item in summaries},
                colors={
                    item["label"]: specs.get(item["key"], {}).get("color", "#3B82F6")
                    for item in summaries
                }
            ),
            use_container_width=True
        )

    st.markdown("---")

    # Data table
    st.markdown("### 🗂️ Data")
    display_cols = ["time"] + [item["key"] for item in summaries]
    st.dataframe(
        df[display_cols].sort_values("time", ascending=False),
        use_container_width=True,
        hide_index=True
    )

    csv_text = fetch_csv(hours)
    if csv_text:
        st.download_button(
            "⬇️ Download CSV",
            data=csv_text,
            file_name=f"boiler_series_{hours}h.csv",
            mime="text/csv"
        )

    st.markdown("---")

    # Correlation
    st.markdown("### 🔗 Correlation")
    correlation = fetch_api(f"/api/v1/telemetry/correlation?hours={hours}")
    if correlation:
        st.plotly_chart(
            create_correlation_heatmap(
                correlation["keys"],
                correlation["matrix"],
                labels={k: v["label"] for k, v in specs.items()}
            ),
            use_container_width=True
        )


# =========================================
# Recommendations Page
# =========================================

def render_recommendations_page():
    """Render the model predictions and recommendations page."""
    st.title("🤖 Optimisation Recommendations")

    st.markdown("""
    Three offline models were trained on plant history to find the cofiring
    setpoints that maximise efficiency at the 5% biomass limit.
    """)

    predictions = fetch_api("/api/v1/recommendations/predictions")
    best = fetch_api("/api/v1/recommendations/best")

    if not predictions or not best:
        st.error("Could not fetch predictions from API")
        return

    models = [p["model"] for p in predictions]
    selected = st.selectbox(
        "Model",
        options=models,
        index=models.index(best["model"]),
        help="Defaults to the most accurate model"
    )

    data = fetch_api(f"/api/v1/recommendations?model={selected}")
    if not data:
        return

    prediction = data["prediction"]
    st.caption(prediction["description"])

    cols = st.columns(4)
    with cols[0]:
        st.metric("Accuracy", f"{prediction['accuracy']:.1f}%")
    with cols[1]:
        st.metric("Predicted Efficiency", f"{prediction['predicted_efficiency']:.1f}%")
    with cols[2]:
        st.metric("Optimal Cofiring", f"{prediction['optimal_cofiring_ratio']:.1f}%")
    with cols[3]:
        st.metric("Predicted CO₂", f"{prediction['predicted_co2']:.0f} mg/Nm³")

    col1, col2 = st.columns(2)
    with col1:
        st.plotly_chart(
            create_model_comparison_chart(predictions, selected=selected),
            use_container_width=True
        )
    with col2:
        st.plotly_chart(
            create_model_comparison_chart(
                predictions, metric="predicted_efficiency",
                title="Predicted Efficiency", selected=selected
            ),
            use_container_width=True
        )

    render_recommendation_cards(data["recommendations"])

    with st.expander("📋 All model results"):
        st.dataframe(pd.DataFrame(predictions), use_container_width=True, hide_index=True)


# =========================================
# Operator Page
# =========================================

@st.fragment(run_every=ACTIVITY_TICK_SECONDS)
def render_live_activity_log():
    """Activity log, advanced by one background tick per interval."""
    status_code, state = call_api("POST", "/api/v1/operator/activity/tick")
    if status_code != 200 or not state:
        st.caption("Activity log unavailable")
        return

    render_activity_log(state["logs"])


def render_operator_page():
    """Render the operator control panel."""
    st.title("🎛️ Operator Controls")

    state = get_live("/api/v1/operator/state")
    if not state:
        st.error("Could not fetch operator state from API")
        return

    user = current_user_name()

    # Mode switches
    col1, col2, col3 = st.columns(3)
    with col1:
        auto_mode = st.toggle("Auto Mode", value=state["auto_mode"])
    with col2:
        system_enabled = st.toggle("System Enabled", value=state["system_enabled"])
    with col3:
        st.metric("Active Alarms", state["active_alarms"])

    if auto_mode != state["auto_mode"] or system_enabled != state["system_enabled"]:
        call_api("PUT", "/api/v1/operator/mode", {
            "auto_mode": auto_mode,
            "system_enabled": system_enabled
        })
        st.rerun()

    st.markdown("---")

    col1, col2 = st.columns([3, 2])

    # Setpoints
    with col1:
        st.markdown("### ⚙️ Setpoints")

        with st.form("setpoint_form"):
            values = {}
            for name, limit in state["limits"].items():
                values[name] = st.slider(
                    f"{name.replace('_', ' ').title()} ({limit['unit']})",
                    min_value=float(limit["minimum"]),
                    max_value=float(limit["maximum"]),
                    value=float(state["setpoints"][name]),
                    step=float(limit["step"]),
                    disabled=auto_mode
                )
            submitted = st.form_submit_button("Update Setpoints", disabled=auto_mode)

        if auto_mode:
            st.caption("Setpoints are held by the automatic controller. Disable Auto Mode to edit.")

        if submitted:
            status_code, payload = call_api("PUT", "/api/v1/operator/controls", values)
            if status_code == 200:
                st.success("Setpoints updated")
                st.rerun()
            elif status_code == 422 and payload:
                render_validation_result(payload.get("message", {}))

        btn1, btn2 = st.columns(2)
        with btn1:
            if st.button("✅ Apply to Plant", use_container_width=True, disabled=not state["system_enabled"]):
                status_code, _ = call_api("POST", "/api/v1/operator/controls/apply", {"user": user})
                if status_code == 200:
                    st.success("Setpoints applied")
                    st.rerun()
        with btn2:
            if st.button("↩️ Reset to Defaults", use_container_width=True):
                call_api("POST", "/api/v1/operator/controls/reset")
                st.rerun()

    # Alarms and log
    with col2:
        st.markdown("### 🚨 Alarms")

        def acknowledge(alarm_id: str):
            call_api("POST", f"/api/v1/operator/alarms/{alarm_id}/acknowledge", {"user": user})
            st.rerun()

        render_alarm_list(state["alarms"], on_acknowledge=acknowledge)

        st.markdown("### 📝 Activity Log")
        render_live_activity_log()

    st.markdown("---")

    # Manual entry
    st.markdown("### ✍️ Manual Data Entry")

    with st.form("manual_entry_form"):
        c1, c2, c3 = st.columns(3)
        with c1:
            coal_flow = st.number_input("Coal Flow (t/h)", value=360.0)
            biomass_flow = st.number_input("Biomass Flow (t/h)", value=18.0)
        with c2:
            steam_temp = st.number_input("Steam Temperature (°C)", value=538.5)
            drum_pressure = st.number_input("Drum Pressure (bar)", value=248.7)
        with c3:
            o2_level = st.number_input("O₂ Level (%)", value=3.45)
            co_level = st.number_input("CO Level (ppm)", value=45.0)

        checked = st.form_submit_button("Validate Entry", type="primary")

    if checked:
        status_code, payload = call_api("POST", "/api/v1/operator/manual-entry/validate", {
            "coal_flow": coal_flow,
            "biomass_flow": biomass_flow,
            "steam_temp": steam_temp,
            "drum_pressure": drum_pressure,
            "o2_level": o2_level,
            "co_level": co_level
        })
        if status_code == 200:
            render_validation_result(payload)


# =========================================
# Main Application
# =========================================

def main():
    """Main application entry point."""
    if not st.session_state.get("authenticated"):
        render_login_page()
        return

    page = render_sidebar()

    if page == "📊 Home":
        render_home_page()
    elif page == "📈 Parameter Detail":
        render_detail_page()
    elif page == "🤖 Recommendations":
        render_recommendations_page()
    elif page == "🎛️ Operator":
        render_operator_page()


if __name__ == "__main__":
    main()
