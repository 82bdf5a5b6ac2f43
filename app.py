"""Streamlit entry point for the modelling framework.

This script sets up the session state, lets the user pick a model, a
data file and a configuration preset, runs the model and displays the
yearly results table.  Scripts and charts are implemented in separate
files under the `pages/` directory.
"""

import streamlit as st

from modelling.catalog import list_data_files, list_models, qualified_name
from modelling.config import RuntimeConfig, configure_logging, load_config
from modelling.errors import ModellingError
from modelling.report import report_to_frame
from modelling.session import Session

st.set_page_config(page_title="Modelling Framework", layout="wide")

PRESETS_DIR = "assets/presets"


def load_preset(name: str) -> RuntimeConfig:
    """Load a configuration preset from the assets/presets folder.

    A preset that does not exist yields the default configuration.
    """
    if name == "Default":
        return RuntimeConfig()
    return load_config(f"{PRESETS_DIR}/{name}.json")


def show_results(session: Session) -> None:
    """Render the session report as a table with a download button."""
    tsv = session.results_as_tsv()
    st.dataframe(report_to_frame(tsv), use_container_width=True)
    st.download_button(
        "Download TSV",
        tsv,
        file_name="results.tsv",
        mime="text/tab-separated-values",
    )


def main() -> None:
    # --- SESSION SETUP -----------------------------------------------------
    if "config" not in st.session_state:
        st.session_state.config = RuntimeConfig()
        configure_logging(st.session_state.config.log_level)

    # --- SIDEBAR: PRESET, MODEL AND DATA -----------------------------------
    st.sidebar.header("Configuration")
    presets = ["pandas_engine", "synthesized_years"]
    preset_choice = st.sidebar.selectbox("Preset", ["Default"] + presets)
    try:
        st.session_state.config = load_preset(preset_choice)
    except ValueError as e:
        st.sidebar.error(f"Failed to load preset: {e}")
    cfg: RuntimeConfig = st.session_state.config

    st.sidebar.header("Select model and data")
    models = list_models(cfg.models_dir)
    data_files = list_data_files(cfg.data_dir)
    model_name = st.sidebar.selectbox("Model", models, index=None, placeholder="Choose a model")
    data_file = st.sidebar.selectbox("Data file", data_files, index=None, placeholder="Choose a data file")

    st.title("Modelling Framework")
    st.markdown(
        """
        Pick a **model** and a **data file** on the left and press
        **Run model**.  Every series bound by the model is listed below,
        one column per year.  Use the **Scripts** page to derive new
        series from the results, and **Results Chart** to plot them.
        """
    )

    if st.sidebar.button("Run model"):
        if model_name is None or data_file is None:
            st.warning("Please select a model and a data file.")
        else:
            try:
                session = Session(qualified_name(model_name, cfg.models_package), cfg)
                session.read_data_from(cfg.data_dir / data_file).run_model()
                st.session_state.session = session
                st.success(f"Model {model_name} ran on {data_file}.")
            except ModellingError as e:
                st.error(f"Error: {e}")

    st.subheader("Results")
    if "session" not in st.session_state:
        st.info("No results yet. Run a model to populate the table.")
        return
    try:
        show_results(st.session_state.session)
    except ModellingError as e:
        st.error(f"Error: {e}")


if __name__ == "__main__":
    main()
