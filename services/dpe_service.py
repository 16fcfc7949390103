# services/dpe_service.py
from __future__ import annotations

import logging
import time
from typing import Callable, List, Optional, Sequence

from config import SETTINGS
from core.dpe_record import DpeResult
from data_adapters.ademe_client import AdemeDPEClient, FetchError, FetchResult

logger = logging.getLogger("dpe_hub.dpe_service")

ProgressCallback = Callable[[int, int], None]


def fetch_dpe(
    commune: str,
    dataset_id: str = SETTINGS.DEFAULT_DATASET_ID,
    limit: int = SETTINGS.DEFAULT_RESULT_LIMIT,
    client: Optional[AdemeDPEClient] = None,
) -> FetchResult:
    """
    Variante tolérante de `AdemeDPEClient.fetch_by_commune` : en cas d'échec,
    l'erreur est journalisée et un résultat vide est renvoyé.
    """
    client = client or AdemeDPEClient()
    try:
        return client.fetch_by_commune(commune, size=limit, dataset_id=dataset_id)
    except FetchError as e:
        logger.error("Erreur d'appel ADEME pour %s : %s", commune, e)
        return FetchResult(total=0, results=[])


def fetch_all_communes(
    communes: Sequence[str],
    dataset_id: str,
    on_progress: Optional[ProgressCallback] = None,
    client: Optional[AdemeDPEClient] = None,
    delay: float = SETTINGS.BULK_DELAY_SECONDS,
    sleep: Callable[[float], None] = time.sleep,
    page_size: int = SETTINGS.BULK_PAGE_SIZE,
) -> List[DpeResult]:
    """
    Interroge l'ADEME commune par commune, une requête à la fois, avec une
    pause entre chaque appel pour ne pas saturer l'API.

    L'échec d'une commune n'interrompt pas l'export : elle est ignorée et la
    progression avance quand même.
    """
    client = client or AdemeDPEClient()
    all_results: List[DpeResult] = []
    total = len(communes)
    failed = []

    for i, commune in enumerate(communes, start=1):
        try:
            sleep(delay)
            res = client.fetch_by_commune(commune, size=page_size, dataset_id=dataset_id)
            all_results.extend(res.results)
        except Exception as exc:
            failed.append(commune)
            logger.warning("Erreur sur %s, commune ignorée : %s", commune, exc)
        if on_progress:
            on_progress(i, total)

    if failed:
        logger.warning("Export partiel : %d/%d communes en échec (%s)",
                       len(failed), total, ", ".join(failed))
    logger.info("Export global : %d DPE récupérés sur %d communes", len(all_results), total)
    return all_results
