# core/dpe_record.py
"""
Forme canonique d'un DPE et normalisation des lignes brutes ADEME.

Chaque dataset ADEME (dpe03existant, dpe02neuf, dpe-france) nomme
différemment les mêmes informations. On essaie, pour chaque champ logique,
une liste ordonnée d'alias : le premier non vide l'emporte, sinon une valeur
par défaut. La normalisation ne lève jamais d'exception sur la forme des
données.
"""
from __future__ import annotations

import math
import uuid
from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, Iterable, List, Optional

import pandas as pd

from config import SETTINGS


# Alias des champs ADEME, par ordre de priorité (à ajuster si le schéma évolue)
DPE_FIELDS: Dict[str, List[str]] = {
    "n_dpe": ["numero_dpe", "n_dpe", "identifiant_dpe", "_id"],
    "date_etablissement_dpe": ["date_etablissement_dpe"],
    "etiquette_dpe": ["etiquette_dpe", "classe_consommation_energie", "classe_bilan_dpe"],
    "etiquette_ges": ["etiquette_ges", "classe_estimation_ges", "classe_emission_ges"],
    "conso_5_usages_m2_an": [
        "conso_5_usages_par_m2_ep",
        "conso_5_usages_m2_an",
        "conso_kwhe_m2_an",
        "consommation_energie",
    ],
    "emission_ges_5_usages_m2_an": [
        "emission_ges_5_usages_par_m2",
        "emission_ges_5_usages_m2_an",
        "emission_ges_kg_co2_m2_an",
        "estimation_ges",
    ],
    "ubat": ["ubat_w_m2_k", "ubat"],
    "cout_total_5_usages": ["cout_total_5_usages"],
    "surface_habitable": [
        "surface_habitable_logement",
        "surface_habitable",
        "surface_thermique_lot",
        "surface_thermique",
    ],
    "adresse_brut": ["adresse_ban", "adresse_brut", "adresse_brute", "adresse_bien"],
    "commune_brut": ["nom_commune_ban", "nom_commune_brut", "nom_commune"],
    "code_postal": ["code_postal_ban", "code_postal_brut", "code_postal"],
    "latitude": ["latitude", "lat"],
    "longitude": ["longitude", "lon", "lng"],
    "annee_construction": ["annee_construction", "periode_construction"],
    "type_batiment": ["type_batiment"],
    "type_chauffage": [
        "type_energie_principale_chauffage",
        "type_installation_chauffage",
        "type_energie_chauffage",
    ],
}

NUMERIC_FIELDS = (
    "conso_5_usages_m2_an",
    "emission_ges_5_usages_m2_an",
    "ubat",
    "cout_total_5_usages",
    "surface_habitable",
)


@dataclass(frozen=True)
class DpeResult:
    n_dpe: str
    date_etablissement_dpe: str
    etiquette_dpe: str
    etiquette_ges: str
    conso_5_usages_m2_an: float
    emission_ges_5_usages_m2_an: float
    ubat: float
    cout_total_5_usages: float
    surface_habitable: float
    adresse_brut: str
    commune_brut: str
    code_postal: str
    annee_construction: Any
    type_batiment: str
    type_chauffage: str
    latitude: Optional[Any] = None
    longitude: Optional[Any] = None

    @property
    def _id(self) -> str:
        return self.n_dpe

    def as_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["_id"] = self.n_dpe
        return d


RECORD_COLUMNS = ["_id"] + [f.name for f in fields(DpeResult)]


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str) and not value.strip():
        return True
    return False


def _first(raw: Dict[str, Any], candidates: List[str]) -> Any:
    for c in candidates:
        v = raw.get(c)
        if not _is_empty(v):
            return v
    return None


def _to_number(value: Any) -> float:
    """Conversion numérique tolérante : tout ce qui n'est pas un nombre fini vaut 0."""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        num = float(str(value).strip().replace(",", ".")) if isinstance(value, str) else float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(num) or math.isinf(num):
        return 0.0
    return num


def _to_grade(value: Any) -> str:
    # l'ADEME renvoie parfois un libellé long ("D (151 à 230)") : on garde la lettre
    if _is_empty(value):
        return SETTINGS.NOT_AVAILABLE
    letter = str(value).strip().upper()[:1]
    return letter if letter and letter in SETTINGS.GRADES else SETTINGS.NOT_AVAILABLE


def _to_text(value: Any, default: str) -> str:
    return default if value is None else str(value).strip()


def normalize_record(raw: Any, commune: str) -> DpeResult:
    """Transforme une ligne brute de l'API ADEME en `DpeResult`.

    `commune` (la ville demandée) sert de valeur de repli pour la commune.
    """
    if not isinstance(raw, dict):
        raw = {}

    values = {key: _first(raw, aliases) for key, aliases in DPE_FIELDS.items()}

    dpe_id = values["n_dpe"]
    na = SETTINGS.NOT_AVAILABLE
    return DpeResult(
        n_dpe=str(dpe_id) if dpe_id is not None else uuid.uuid4().hex,
        date_etablissement_dpe=_to_text(values["date_etablissement_dpe"], ""),
        etiquette_dpe=_to_grade(values["etiquette_dpe"]),
        etiquette_ges=_to_grade(values["etiquette_ges"]),
        conso_5_usages_m2_an=_to_number(values["conso_5_usages_m2_an"]),
        emission_ges_5_usages_m2_an=_to_number(values["emission_ges_5_usages_m2_an"]),
        ubat=_to_number(values["ubat"]),
        cout_total_5_usages=_to_number(values["cout_total_5_usages"]),
        surface_habitable=_to_number(values["surface_habitable"]),
        adresse_brut=_to_text(values["adresse_brut"], SETTINGS.ADDRESS_PLACEHOLDER),
        commune_brut=_to_text(values["commune_brut"], commune),
        code_postal=_to_text(values["code_postal"], ""),
        annee_construction=values["annee_construction"] if values["annee_construction"] is not None else na,
        type_batiment=_to_text(values["type_batiment"], na),
        type_chauffage=_to_text(values["type_chauffage"], na),
        # coordonnées transmises telles quelles : None = pas de point sur la carte
        latitude=values["latitude"],
        longitude=values["longitude"],
    )


def records_to_frame(records: Iterable[DpeResult]) -> pd.DataFrame:
    rows = [r.as_dict() for r in records]
    if not rows:
        return pd.DataFrame(columns=RECORD_COLUMNS)
    return pd.DataFrame.from_records(rows, columns=RECORD_COLUMNS)
