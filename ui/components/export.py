from typing import Sequence

import streamlit as st

from core.dpe_record import DpeResult
from services.export_service import prepare_export


def render_export_button(records: Sequence[DpeResult], filename: str, label: str, key: str):
    # sans données, le bouton ne fait qu'afficher l'avertissement : aucun fichier produit
    if not records:
        if st.button(label, key=key, use_container_width=True):
            prepare_export(records, filename, warn=st.warning)
        return

    export = prepare_export(records, filename)
    clicked = st.download_button(
        label,
        data=export.data,
        file_name=export.filename,
        mime=export.mime,
        key=key,
        use_container_width=True,
    )
    if clicked:
        st.toast("Téléchargement lancé", icon="✅")
