# -*- coding: utf-8 -*-
"""Fixtures partagées pour les tests DPE Hub."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from core.dpe_record import DpeResult, normalize_record


@pytest.fixture
def raw_dpe03() -> dict:
    """Ligne brute du dataset dpe03existant (champs BAN)."""
    return {
        "numero_dpe": "2354E0123456X",
        "date_etablissement_dpe": "2024-03-01",
        "etiquette_dpe": "f",
        "etiquette_ges": "D",
        "conso_5_usages_par_m2_ep": 345.2,
        "emission_ges_5_usages_par_m2": "41.5",
        "ubat_w_m2_k": "0.92",
        "cout_total_5_usages": 2150,
        "surface_habitable_logement": 87,
        "adresse_ban": "12 Rue de la Paix 54400 Longwy",
        "nom_commune_ban": "Longwy",
        "code_postal_ban": "54400",
        "latitude": 49.52,
        "longitude": 5.76,
        "annee_construction": 1962,
        "type_batiment": "maison",
        "type_energie_principale_chauffage": "Gaz naturel",
    }


@pytest.fixture
def raw_legacy() -> dict:
    """Ligne brute du dataset dpe-france (ancien schéma)."""
    return {
        "numero_dpe": "1054V1000123A",
        "date_etablissement_dpe": "2019-06-12",
        "classe_consommation_energie": "E (231 à 330)",
        "classe_estimation_ges": "c",
        "consommation_energie": "251,7",
        "estimation_ges": 19,
        "surface_thermique_lot": "64.5",
        "adresse_brut": "3 place Darche",
        "nom_commune": "LONGWY",
        "code_postal_brut": "54400",
        "lat": "49.5191",
        "lon": "5.7649",
    }


def make_record(**overrides) -> DpeResult:
    base = normalize_record({}, "Longwy")
    fields = base.as_dict()
    fields.pop("_id")
    fields.update(overrides)
    return DpeResult(**fields)


@pytest.fixture
def record_factory():
    return make_record


@pytest.fixture
def sample_records() -> list:
    return [
        make_record(n_dpe="a", date_etablissement_dpe="2024-03-01", etiquette_dpe="F",
                    conso_5_usages_m2_an=300.0),
        make_record(n_dpe="b", date_etablissement_dpe="2023-11-02", etiquette_dpe="C",
                    conso_5_usages_m2_an=100.0),
        make_record(n_dpe="c", date_etablissement_dpe="", etiquette_dpe="G",
                    conso_5_usages_m2_an=0.0),
    ]


def make_response(payload=None, status_code: int = 200, text: str = "") -> MagicMock:
    resp = MagicMock()
    resp.status_code = status_code
    resp.ok = 200 <= status_code < 300
    resp.text = text
    if isinstance(payload, Exception):
        resp.json.side_effect = payload
    else:
        resp.json.return_value = payload
    return resp


@pytest.fixture
def response_factory():
    return make_response
