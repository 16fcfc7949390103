# services/export_service.py
from __future__ import annotations

import csv
import logging
import re
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Sequence, Tuple

import pandas as pd

from core.dpe_record import DpeResult

logger = logging.getLogger("dpe_hub.export")

CSV_MIME = "text/csv;charset=utf-8"
EMPTY_EXPORT_MESSAGE = "Aucune donnée à exporter."

# (en-tête, attribut DpeResult) dans l'ordre des colonnes du fichier
CSV_COLUMNS: List[Tuple[str, str]] = [
    ("ID_DPE", "n_dpe"),
    ("Date_Etablissement", "date_etablissement_dpe"),
    ("Commune", "commune_brut"),
    ("Code_Postal", "code_postal"),
    ("Adresse", "adresse_brut"),
    ("Etiquette_DPE", "etiquette_dpe"),
    ("Etiquette_GES", "etiquette_ges"),
    ("Consommation_kWh_m2", "conso_5_usages_m2_an"),
    ("GES_kg_m2", "emission_ges_5_usages_m2_an"),
    ("Surface_m2", "surface_habitable"),
    ("Annee_Construction", "annee_construction"),
    ("Estimation_Cout_EUR", "cout_total_5_usages"),
]

_LINE_BREAKS = re.compile(r"[\r\n]+")


class EmptyExportError(ValueError):
    """Export demandé sans aucune ligne."""


@dataclass(frozen=True)
class CsvExport:
    filename: str
    data: bytes
    mime: str = CSV_MIME


def clean_cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return _LINE_BREAKS.sub(" ", str(value))


def ensure_csv_extension(filename: str) -> str:
    return filename if filename.lower().endswith(".csv") else f"{filename}.csv"


def build_csv(records: Sequence[DpeResult]) -> bytes:
    """
    CSV « Excel FR » : séparateur point-virgule, valeurs entre guillemets,
    fins de ligne CRLF, UTF-8 avec BOM.
    """
    if not records:
        raise EmptyExportError(EMPTY_EXPORT_MESSAGE)

    headers = [h for h, _ in CSV_COLUMNS]
    rows = [[clean_cell(getattr(r, attr)) for _, attr in CSV_COLUMNS] for r in records]
    df = pd.DataFrame(rows, columns=headers)
    # en-tête sans guillemets, valeurs toutes entre guillemets
    text = ";".join(headers) + "\r\n" + df.to_csv(
        sep=";",
        index=False,
        header=False,
        quoting=csv.QUOTE_ALL,
        lineterminator="\r\n",
    )
    return text.encode("utf-8-sig")


def prepare_export(
    records: Sequence[DpeResult],
    filename: str,
    warn: Optional[Callable[[str], Any]] = None,
) -> Optional[CsvExport]:
    """Prépare le fichier à télécharger ; `None` (et un avertissement) si rien à exporter."""
    try:
        data = build_csv(records)
    except EmptyExportError as e:
        logger.warning("Export %s annulé : %s", filename, e)
        if warn:
            warn(str(e))
        return None
    export = CsvExport(filename=ensure_csv_extension(filename), data=data)
    logger.info("Export %s : %d lignes", export.filename, len(records))
    return export
