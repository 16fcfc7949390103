# app.py
# Streamlit app entrypoint

import streamlit as st

from data_adapters.ademe_client import AdemeDPEClient
from ui.main_interface import render_main_interface
from ui.components.sidebar import render_sidebar
from ui.state import AppState, Refresh, FetchStatus, needs_fetch, reduce, run_pending_fetch
from utils.logger import setup_logger

st.set_page_config(page_title="DPE Hub", layout="wide")
logger = setup_logger()

# État de la session : un seul objet, modifié uniquement via `reduce`
if "app_state" not in st.session_state:
    st.session_state.app_state = AppState.initial()
if "ademe_client" not in st.session_state:
    st.session_state.ademe_client = AdemeDPEClient()


def dispatch(event) -> AppState:
    st.session_state.app_state = reduce(st.session_state.app_state, event)
    return st.session_state.app_state


client = st.session_state.ademe_client

# --- Sidebar (sélection) ---
render_sidebar(st.session_state.app_state, dispatch, client)

# Premier affichage : on lance la requête pour la sélection par défaut
if st.session_state.app_state.status == FetchStatus.IDLE:
    dispatch(Refresh())

if needs_fetch(st.session_state.app_state):
    with st.spinner("Récupération des données ADEME…"):
        dispatch(run_pending_fetch(st.session_state.app_state, client))

# --- Main layout ---
render_main_interface(st.session_state.app_state, dispatch)
