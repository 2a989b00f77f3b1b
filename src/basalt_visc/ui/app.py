from __future__ import annotations
import json
import streamlit as st
from basalt_visc.version import __version__
from basalt_visc.core.config import load_settings, configure_logging
from basalt_visc.core.exceptions import DecodeError
from basalt_visc.core.models import COMPOSITION_FIELDS, Dataset, ModelType, TrainingConfig
from basalt_visc.io.file_loader import import_samples, NO_VALID_ROWS_MESSAGE
from basalt_visc.io.mock_data import load_mock_dataset
from basalt_visc.io.exporters import series_frame, series_csv
from basalt_visc.services.grouping import group_samples
from basalt_visc.services.series import (
    SelectionState, reconcile_selection, select_group, active_series, representative, group_options,
)

settings = load_settings()
configure_logging(settings)

st.set_page_config(page_title="Basalt Viscosity Explorer", layout="wide")
st.title("Basalt melt viscosity")

if "dataset" not in st.session_state:
    st.session_state.dataset = Dataset()
    st.session_state.selection = SelectionState()

with st.sidebar:
    st.header("Data")
    upload = st.file_uploader("Import Excel/CSV", type=["xlsx", "xls", "csv", "txt"])
    import_btn = st.button("Import file", type="primary", disabled=upload is None)
    mock_btn = st.button("Load demo data", disabled=not settings.enable_mock)

    st.header("Training project")
    model_type = st.selectbox("Model strategy", list(ModelType), index=1, format_func=lambda m: m.value)
    st.caption(model_type.description)
    test_size = st.slider("Test size", min_value=0.05, max_value=0.5, value=0.2, step=0.05)

if import_btn and upload is not None:
    try:
        loaded = import_samples(upload, name=upload.name, sheet=settings.sheet)
    except DecodeError as e:
        # previous data stays on screen
        st.error(str(e))
    else:
        if loaded.is_empty:
            st.warning(NO_VALID_ROWS_MESSAGE)
        else:
            st.session_state.dataset = loaded
if mock_btn:
    st.session_state.dataset = load_mock_dataset()

dataset: Dataset = st.session_state.dataset
groups = group_samples(dataset.samples)
previous = st.session_state.selection
selection = reconcile_selection(previous, groups, dataset.token)

if dataset.is_empty:
    st.info("Import a file or load the demo data to begin.")
    st.stop()

st.caption(f"Source: {dataset.provenance} / {dataset.detail}")

options = group_options(groups)
labels = dict(options)
sigs = [sig for sig, _ in options]
if selection != previous or st.session_state.get("group_choice") not in groups:
    st.session_state.group_choice = selection.active
chosen = st.selectbox("Select sample", sigs, key="group_choice", format_func=lambda s: labels[s])
selection = select_group(selection, groups, chosen)
st.session_state.selection = selection

series = active_series(selection, groups)
rep = representative(series)
frame = series_frame(series)

st.subheader(f"{len(series)} temperature-viscosity points")
st.line_chart(frame, x="temperature", y="viscosity_value")

if rep is not None:
    cols = st.columns(len(COMPOSITION_FIELDS))
    for col, field in zip(cols, COMPOSITION_FIELDS):
        col.metric(field, f"{getattr(rep, field):g}")

st.dataframe(frame, hide_index=True)
st.download_button("Download series CSV", series_csv(series), file_name="series.csv")

with st.expander("Code-generation request"):
    config = TrainingConfig(model_type=model_type, test_size=test_size)
    st.code(json.dumps(config.payload(), indent=2), language="json")

st.caption(f"basalt-visc {__version__}")
