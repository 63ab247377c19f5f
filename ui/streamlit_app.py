"""
Assignment points preview.
Streamlit interface: edit an assignment, see rendered points, the totals report and diagnostics.
"""
import sys
from pathlib import Path

# Ensure project root is on PYTHONPATH (Streamlit Cloud / headless)
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import streamlit as st
import pandas as pd
import plotly.express as px

from core.config import CONFIG_PATH, ExtensionConfig, configure_logging, load_config
from core.schema import DiagnosticLevel, TotalsMap
from pipeline.extension import BuildResult, build_document

SAMPLE_DOCUMENT = """# Assignment

:::{pointreport}
:::

- Task 1: {points}`2`
- Task 2: {points}`2 bonus`
- Task 3: {points}`1`
"""


def get_config() -> ExtensionConfig:
    """Session-cached config."""
    if "config" not in st.session_state:
        st.session_state.config = load_config(CONFIG_PATH)
    return st.session_state.config


def totals_frame(totals: TotalsMap, grand_total_label: str) -> pd.DataFrame:
    """One row per category plus the grand total, in report order."""
    rows = [{"Category": grand_total_label, "Points": totals.grand_total}]
    rows += [{"Category": category, "Points": points} for category, points in totals.bonus_entries()]
    return pd.DataFrame(rows)


def render_sidebar(config: ExtensionConfig) -> None:
    st.sidebar.title("Points")
    st.sidebar.caption("Known categories")
    st.sidebar.write(", ".join(config.known_categories) or "(none)")
    st.sidebar.caption(f"Grand total label: `{config.grand_total_label}`")


def render_result(result: BuildResult, config: ExtensionConfig) -> None:
    col_doc, col_totals = st.columns([3, 2])
    with col_doc:
        st.subheader("Rendered")
        st.markdown(result.markdown)
    with col_totals:
        st.subheader("Totals")
        df = totals_frame(result.totals, config.grand_total_label)
        st.dataframe(df, hide_index=True, use_container_width=True)
        if len(df) > 1:
            fig = px.bar(df, x="Category", y="Points", title="Points by category")
            st.plotly_chart(fig, use_container_width=True)

    st.subheader("Diagnostics")
    if not result.diagnostics:
        st.success("No problems found.")
    for d in result.diagnostics:
        if d.level == DiagnosticLevel.ERROR:
            st.error(f"{d.kind.value}: {d.message}")
        else:
            st.warning(f"{d.kind.value}: {d.message}")


def main() -> None:
    st.set_page_config(
        page_title="Assignment Points",
        page_icon="📝",
        layout="wide",
    )
    config = get_config()
    configure_logging(config.log_level)
    render_sidebar(config)
    st.title("Assignment points")
    source = st.text_area("Document source", value=SAMPLE_DOCUMENT, height=260)
    render_result(build_document(source, config=config), config)


if __name__ == "__main__":
    main()
