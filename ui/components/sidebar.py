import streamlit as st
from typing import Callable

from config import SETTINGS
from services.dpe_service import fetch_all_communes
from ui.components.export import render_export_button
from ui.state import AppState, SelectCommune, SelectDataset, SelectYear

BULK_FILENAME = "Export_Global_Complet.csv"


def bulk_export_key(dataset_id: str) -> str:
    # un export par base ADEME : changer de base ne ressert pas l'export précédent
    return f"bulk_export_{dataset_id}"


def _year_label(year: str) -> str:
    return "Historique (tous)" if year == SETTINGS.ALL_YEARS else year


def render_sidebar(state: AppState, dispatch: Callable, client):
    st.sidebar.header("🔎 Sélection")

    # Commune
    st.sidebar.subheader("📍 Ville")
    communes = list(SETTINGS.COMMUNES)
    commune = st.sidebar.selectbox(
        "Commune", communes, index=communes.index(state.commune), label_visibility="collapsed"
    )
    if commune != state.commune:
        dispatch(SelectCommune(commune))

    # Année (filtre local, pas de nouvelle requête)
    st.sidebar.subheader("📅 Année du diagnostic")
    years = list(SETTINGS.YEARS)
    year = st.sidebar.selectbox(
        "Année", years, index=years.index(state.year), format_func=_year_label,
        label_visibility="collapsed",
    )
    if year != state.year:
        dispatch(SelectYear(year))

    # Base ADEME
    st.sidebar.subheader("🗄️ Base ADEME")
    for ds in SETTINGS.DATASETS:
        selected = ds.id == state.dataset_id
        if st.sidebar.button(ds.name, key=f"ds_{ds.id}", type="primary" if selected else "secondary",
                             use_container_width=True):
            dispatch(SelectDataset(ds.id))
            st.rerun()

    st.sidebar.divider()
    _render_bulk_export(state, client)


def _render_bulk_export(state: AppState, client):
    n = len(SETTINGS.COMMUNES)
    key = bulk_export_key(state.dataset_id)
    if st.sidebar.button(f"⬇️ Export global ({n} communes)", use_container_width=True):
        bar = st.sidebar.progress(0.0, text=f"Récupération 0/{n}")

        def on_progress(done: int, total: int):
            bar.progress(done / total, text=f"Récupération {done}/{total}")

        st.session_state[key] = fetch_all_communes(
            SETTINGS.COMMUNES, state.dataset_id, on_progress=on_progress, client=client
        )
        bar.empty()

    if key in st.session_state:
        with st.sidebar:
            render_export_button(
                st.session_state[key], BULK_FILENAME,
                label="💾 Télécharger l'export global", key=f"bulk_download_{state.dataset_id}",
            )
