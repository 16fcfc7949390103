from typing import Sequence

import plotly.express as px
import streamlit as st

from config import SETTINGS
from core.dpe_record import DpeResult
from core.stats import grade_distribution


def render_grade_chart(records: Sequence[DpeResult]):
    st.subheader(f"📊 Statut énergétique global · {len(records)} dossiers")

    if not records:
        st.caption("En attente de données")
        return

    counts = grade_distribution(records)
    fig = px.bar(
        x=list(counts.keys()),
        y=list(counts.values()),
        color=list(counts.keys()),
        color_discrete_map=SETTINGS.GRADE_COLORS,
        text=list(counts.values()),
        labels={"x": "Étiquette DPE", "y": "Nombre"},
        title="Répartition des étiquettes DPE",
    )
    fig.update_layout(showlegend=False, height=320)
    st.plotly_chart(fig, use_container_width=True)
