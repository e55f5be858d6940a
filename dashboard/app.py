"""Streamlit board for the recreation schedule render model."""

from __future__ import annotations

import datetime
from typing import Any, Dict, Optional

import pandas as pd
import requests
import streamlit as st

# ==========================================
# Configuration & Constants
# ==========================================
# Point this to your local FastAPI server
API_BASE_URL = "http://127.0.0.1:8000"
NOW_REFRESH_SECONDS = 60

st.set_page_config(
    page_title="Schedule Board",
    page_icon="🏀",
    layout="wide",
)

BAND_LABELS = {
    "low": "Quiet",
    "moderate": "Moderate",
    "high": "Busy",
    "critical": "Packed",
}


# ==========================================
# API Helper Functions
# ==========================================
def fetch_schedule(target_date: str, width: int, height: int) -> Optional[Dict[str, Any]]:
    """Calls the backend render-model endpoint."""
    try:
        response = requests.get(
            f"{API_BASE_URL}/schedule",
            params={"date": target_date, "width": width, "height": height},
            timeout=10,
        )
        response.raise_for_status()
        return response.json()
    except requests.exceptions.RequestException as e:
        st.error(f"Schedule unavailable: {e}")
        return None


# ==========================================
# UI Sections
# ==========================================
def render_capacity_row(columns: list[Dict[str, Any]]) -> None:
    readings = [column for column in columns if column.get("capacity")]
    if not readings:
        st.caption("Live occupancy unavailable.")
        return
    metric_columns = st.columns(len(readings))
    for slot, column in zip(metric_columns, readings):
        capacity = column["capacity"]
        slot.metric(
            column["display_name"],
            f"{capacity['count']}/{capacity['capacity']}",
            BAND_LABELS.get(capacity["band"], capacity["band"]),
            delta_color="off",
        )


def render_column_blocks(columns: list[Dict[str, Any]]) -> None:
    grid = st.columns(len(columns))
    for slot, column in zip(grid, columns):
        with slot:
            st.subheader(column["display_name"])
            blocks = column.get("blocks", [])
            if not blocks:
                st.caption("Nothing booked.")
                continue
            df = pd.DataFrame(
                [
                    {
                        "label": " / ".join(block["label_lines"]),
                        "top_px": round(block["top_px"], 1),
                        "height_px": round(block["height_px"], 1),
                        "mode": block["label_mode"],
                        "tone": block["tone"],
                        "continued": block["continues_from_earlier"],
                    }
                    for block in blocks
                ]
            )
            st.dataframe(df, use_container_width=True, hide_index=True)


@st.fragment(run_every=NOW_REFRESH_SECONDS)
def render_schedule(target_date: str, width: int, height: int) -> None:
    result = fetch_schedule(target_date, width, height)
    if not result:
        return

    window = result["window"]
    marker = result["now_marker"]
    info_col1, info_col2 = st.columns(2)
    info_col1.metric("Window", f"{window['start'][11:16]} – {window['end'][11:16]}")
    if marker["visible"]:
        info_col2.metric("Now marker", f"{marker['top_px']:.0f}px")
    else:
        info_col2.metric("Now marker", "hidden")

    render_capacity_row(result["columns"])
    render_column_blocks(result["columns"])


# ==========================================
# Main App
# ==========================================
def main() -> None:
    st.sidebar.title("Schedule Board")
    st.sidebar.markdown("---")
    target_date = st.sidebar.date_input("Date", datetime.date.today())
    width = st.sidebar.number_input("Viewport width (px)", min_value=0, max_value=4000, value=1280)
    height = st.sidebar.number_input("Viewport height (px)", min_value=0, max_value=4000, value=900)
    st.sidebar.markdown("---")
    st.sidebar.caption(f"Now marker refreshes every {NOW_REFRESH_SECONDS}s")

    render_schedule(str(target_date), int(width), int(height))


if __name__ == "__main__":
    main()
