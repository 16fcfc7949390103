import streamlit as st
from typing import Callable

from config import SETTINGS
from core.stats import compute_stats, filter_by_year, paginate
from ui.components.charts import render_grade_chart
from ui.components.export import render_export_button
from ui.components.kpis import render_kpis
from ui.components.map_view import render_map
from ui.components.results_table import render_results_table
from ui.state import AppState, FetchStatus


def export_filename(state: AppState) -> str:
    return f"dpe_{state.commune}_{state.year}.csv"


def render_main_interface(state: AppState, dispatch: Callable):
    st.title("🌍 Prospection DPE")
    st.caption(
        "Dernières mises à jour de l'ADEME pour les communes suivies. "
        "Données triées par date d'établissement."
    )

    if state.status == FetchStatus.LOADING:
        st.info("Récupération des données ADEME…")
        return

    if state.status == FetchStatus.ERROR:
        st.error("Impossible de récupérer les données ADEME pour cette sélection.")
        if state.error:
            with st.expander("Détail de l'erreur"):
                st.code(state.error)
        return

    filtered = filter_by_year(state.records, state.year)

    top_left, top_right = st.columns([3, 1])
    with top_left:
        st.markdown(f"**{state.commune}** · {SETTINGS.dataset(state.dataset_id).name}")
        st.caption(f"{state.total} diagnostics recensés par l'ADEME, {len(state.records)} chargés.")
    with top_right:
        render_export_button(filtered, export_filename(state), label="⬇️ Exporter (.csv)", key="csv_download")

    if state.status == FetchStatus.SUCCESS and filtered:
        render_kpis(compute_stats(filtered))

    chart_col, map_col = st.columns(2, gap="large")
    with chart_col:
        render_grade_chart(filtered)
    with map_col:
        render_map(filtered, state.commune)

    page = paginate(filtered, SETTINGS.TABLE_PAGE_SIZE, state.page)
    render_results_table(page, dispatch)
