from typing import Callable, Sequence

import pandas as pd
import streamlit as st
from st_aggrid import AgGrid, GridOptionsBuilder

from config import SETTINGS
from core.dpe_record import DpeResult, records_to_frame
from core.stats import Page
from ui.state import ChangePage

DISPLAY_COLUMNS = {
    "adresse_brut": "Adresse",
    "localite": "Localité",
    "date_dpe": "Date de DPE",
    "etiquette_dpe": "DPE",
    "etiquette_ges": "GES",
    "surface_habitable": "Surface (m²)",
}


def table_frame(records: Sequence[DpeResult]) -> pd.DataFrame:
    """Colonnes affichées dans le tableau, dates au format français."""
    df = records_to_frame(records)
    df["adresse_brut"] = df["adresse_brut"].replace("", SETTINGS.ADDRESS_PLACEHOLDER)
    df["localite"] = (df["code_postal"].astype(str) + " " + df["commune_brut"].astype(str)).str.strip()
    dates = pd.to_datetime(df["date_etablissement_dpe"], errors="coerce", format="ISO8601")
    df["date_dpe"] = dates.dt.strftime("%d/%m/%Y").fillna(SETTINGS.NOT_AVAILABLE)
    return df[list(DISPLAY_COLUMNS.keys())].rename(columns=DISPLAY_COLUMNS)


def render_results_table(page: Page, dispatch: Callable):
    st.subheader("🏠 Liste des diagnostics les plus récents")

    if page.total == 0:
        st.info("Aucun résultat trouvé pour cette sélection.")
        return

    display = table_frame(page.items)
    gob = GridOptionsBuilder.from_dataframe(display)
    gob.configure_default_column(sortable=True, filter=True, resizable=True)
    AgGrid(
        display,
        gridOptions=gob.build(),
        height=420,
        fit_columns_on_grid_load=True,
        theme="balham",
        key=f"dpe_grid_{page.number}",
    )

    prev_col, info_col, next_col = st.columns([1, 3, 1])
    with prev_col:
        if st.button("◀ Précédent", disabled=not page.has_previous, use_container_width=True):
            dispatch(ChangePage(page.number - 1))
            st.rerun()
    with info_col:
        st.caption(f"Page {page.number}/{page.page_count} · {page.total} diagnostics")
    with next_col:
        if st.button("Suivant ▶", disabled=not page.has_next, use_container_width=True):
            dispatch(ChangePage(page.number + 1))
            st.rerun()
