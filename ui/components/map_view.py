import pydeck as pdk
import streamlit as st
from typing import Sequence

from config import SETTINGS
from core.dpe_record import DpeResult, records_to_frame
from utils.geo import hex_to_rgb, map_center, valid_points

GREY = [170, 170, 170]


def _layer_results(df):
    if df is None or df.empty:
        return None
    layer = pdk.Layer(
        "ScatterplotLayer",
        data=df,
        get_position="[lon, lat]",
        get_radius=25,
        get_fill_color="color",
        pickable=True,
        opacity=0.9,
        stroked=False,
        filled=True,
        auto_highlight=True,
    )
    return layer


def render_map(records: Sequence[DpeResult], commune: str):
    st.subheader("🗺️ Carte des diagnostics")

    df = valid_points(records_to_frame(records))
    if not df.empty:
        df["color"] = df["etiquette_dpe"].map(
            lambda g: hex_to_rgb(SETTINGS.GRADE_COLORS[g]) if g in SETTINGS.GRADE_COLORS else GREY
        )
    lat, lon = map_center(commune, df)

    layers = []
    lr = _layer_results(df)
    if lr:
        layers.append(lr)

    tooltip = {
        "text": "{adresse_brut}\nDPE: {etiquette_dpe} | GES: {etiquette_ges}\nSurface: {surface_habitable} m²"
    }
    view = pdk.ViewState(latitude=lat, longitude=lon, zoom=13)
    st.pydeck_chart(pdk.Deck(layers=layers, initial_view_state=view, tooltip=tooltip))

    missing = len(records) - len(df)
    if missing:
        st.caption(f"{missing} diagnostic(s) sans coordonnées exploitables, absents de la carte.")
