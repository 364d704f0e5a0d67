import pandas as pd
import streamlit as st
from contextlib import contextmanager

from core.data import DATABASE_PATH, connect
from core.metrics_engagement import ENGAGEMENT_COLUMNS, hourly_engagement_chart, load_hourly_engagement
from core.metrics_visits import VISIT_COLUMNS, load_visit_duration, visit_duration_chart


# ---------- UI / layout helpers ----------
def inject_base_styles():
    if st.session_state.get("_base_css_injected"):
        return
    st.markdown(
        """
        <style>
        .app-top-bar {padding: 6px 0 4px;border-bottom: 1px solid #e5e7eb;margin-bottom: 10px;}
        .app-top-bar .breadcrumb {color: #6b7280;font-size: 0.9rem;margin-bottom: 2px;}
        .app-top-bar .page-title {font-size: 1.4rem;font-weight: 700;color: #111827;}
        </style>
        """,
        unsafe_allow_html=True,
    )
    st.session_state["_base_css_injected"] = True


def render_page_header(title: str, breadcrumb: str, export_df: pd.DataFrame, export_name: str):
    inject_base_styles()
    c1, c2 = st.columns([8, 2])
    with c1:
        st.markdown(
            f"<div class='app-top-bar'><div class='breadcrumb'>{breadcrumb}</div><div class='page-title'>{title}</div></div>",
            unsafe_allow_html=True,
        )
    with c2:
        if not export_df.empty:
            st.download_button(
                "Export CSV",
                data=export_df.to_csv(index=False).encode("utf-8"),
                file_name=export_name,
                mime="text/csv",
            )


@contextmanager
def report_connection():
    conn = connect(read_only=True)
    try:
        yield conn
    finally:
        conn.close()


# ---------- Pages ----------
def render_visit_duration_page():
    with report_connection() as conn:
        rows = load_visit_duration(conn)["data"]
    df = pd.DataFrame(rows, columns=VISIT_COLUMNS)
    render_page_header("Visit Duration by Artist", "Dashboard / Task 1", df, "task-1.csv")
    if df.empty:
        st.info("No visits recorded yet.")
        return
    st.caption("Durations are in milliseconds; unique visitors count distinct sessions.")
    st.vega_lite_chart(visit_duration_chart(rows), use_container_width=True)
    st.dataframe(df, use_container_width=True, hide_index=True)


def render_hourly_engagement_page():
    with report_connection() as conn:
        rows = load_hourly_engagement(conn)["data"]
    df = pd.DataFrame(rows, columns=ENGAGEMENT_COLUMNS)
    render_page_header("Hourly Engagement by Artist", "Dashboard / Task 2", df, "task-2.csv")
    if df.empty:
        st.info("No engagement events recorded yet.")
        return
    st.caption("Hours are UTC. Score = plays + 2 x likes + 2 x playlist adds + 3 x shares.")
    st.vega_lite_chart(hourly_engagement_chart(rows), use_container_width=True)
    st.dataframe(df, use_container_width=True, hide_index=True)


# ---------- UI setup ----------
st.set_page_config(page_title="Artist Engagement Dashboard", layout="wide")
inject_base_styles()
st.title("Artist Engagement Dashboard")

if not DATABASE_PATH.exists():
    st.error(f"Database not found at {DATABASE_PATH}. Set DASHBOARD_DB_PATH to the dashboard SQLite file.")
    st.stop()

with st.sidebar:
    st.markdown("### Navigate")
    nav_choice = st.radio("Navigate", ["Visit Duration", "Hourly Engagement"], index=0)

if nav_choice == "Visit Duration":
    render_visit_duration_page()
else:
    render_hourly_engagement_page()
