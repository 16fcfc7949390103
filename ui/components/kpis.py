import streamlit as st

from core.stats import AggregateStats


def render_kpis(stats: AggregateStats):
    c1, c2, c3 = st.columns(3)
    c1.metric("Conso moyenne", f"{stats.average:.0f} kWh/m²")
    c2.metric("Passoires F/G", stats.passoires)
    c3.metric("Incidence thermique", f"{stats.percent_passoires:.0f} %")
