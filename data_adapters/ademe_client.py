import logging
from dataclasses import dataclass, field
from typing import List, Optional

import requests

from config import SETTINGS, DatasetDescriptor
from core.dpe_record import DpeResult, normalize_record

logger = logging.getLogger("dpe_hub.ademe")


class FetchError(Exception):
    """Échec d'un appel à l'API ADEME (réseau, statut HTTP, JSON illisible)."""

    def __init__(self, message: str, commune: Optional[str] = None,
                 status_code: Optional[int] = None, body: Optional[str] = None):
        super().__init__(message)
        self.commune = commune
        self.status_code = status_code
        self.body = body


@dataclass(frozen=True)
class FetchResult:
    total: int = 0
    results: List[DpeResult] = field(default_factory=list)


def department_filter(commune: str) -> str:
    moselle = {c.lower() for c in SETTINGS.MOSELLE_COMMUNES}
    dept = SETTINGS.ALTERNATE_DEPARTMENT if commune.strip().lower() in moselle else SETTINGS.PRIMARY_DEPARTMENT
    return f"{dept}*"


def build_query_filter(commune: str, dataset: DatasetDescriptor) -> str:
    """Filtre `qs` Data Fair : commune exacte ET code postal du département."""
    name = commune.replace('"', '\\"')
    return (
        f'{dataset.commune_field}:"{name}" '
        f"AND {dataset.postcode_field}:{department_filter(commune)}"
    )


class AdemeDPEClient:
    def __init__(self, base_url: Optional[str] = None,
                 session: Optional[requests.Session] = None,
                 timeout: Optional[int] = None):
        self.base_url = base_url or SETTINGS.ADEME_API_BASE
        self.session = session or requests.Session()
        self.timeout = timeout or SETTINGS.REQUEST_TIMEOUT

    def lines_url(self, dataset_id: str) -> str:
        return f"{self.base_url}/datasets/{dataset_id}/lines"

    def fetch_by_commune(
        self,
        commune: str,
        size: int = SETTINGS.DEFAULT_RESULT_LIMIT,
        dataset_id: str = SETTINGS.DEFAULT_DATASET_ID,
    ) -> FetchResult:
        """
        Récupère les DPE d'une commune, du plus récent au plus ancien.
        Lève `FetchError` si l'appel échoue ; c'est à l'appelant de décider.
        """
        dataset = SETTINGS.dataset(dataset_id)
        params = {
            "size": max(1, min(size, SETTINGS.MAX_ROWS)),
            "sort": SETTINGS.SORT_FIELD,
            "qs": build_query_filter(commune, dataset),
        }
        url = self.lines_url(dataset.id)

        try:
            r = self.session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as exc:
            raise FetchError(f"Erreur réseau ADEME : {exc}", commune=commune) from exc

        if not r.ok:
            raise FetchError(
                f"Erreur API ADEME ({r.status_code}): {r.text}",
                commune=commune,
                status_code=r.status_code,
                body=r.text,
            )

        try:
            payload = r.json()
        except ValueError as exc:
            raise FetchError("Réponse ADEME illisible (JSON invalide)", commune=commune,
                             status_code=r.status_code, body=r.text) from exc
        if not isinstance(payload, dict):
            raise FetchError("Réponse ADEME inattendue", commune=commune,
                             status_code=r.status_code, body=r.text)

        rows = payload.get("results") or []
        if not isinstance(rows, list):
            raise FetchError("Réponse ADEME inattendue", commune=commune,
                             status_code=r.status_code, body=r.text)
        results = [normalize_record(row, commune) for row in rows]
        try:
            total = int(payload.get("total") or 0)
        except (TypeError, ValueError):
            total = 0
        logger.info("%s (%s) : %d DPE reçus sur %d", commune, dataset.id, len(results), total)
        return FetchResult(total=total, results=results)
