import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional, Tuple

from config import SETTINGS
from core.dpe_record import DpeResult
from data_adapters.ademe_client import AdemeDPEClient, FetchError

logger = logging.getLogger("dpe_hub.state")


class FetchStatus(Enum):
    IDLE = "IDLE"
    LOADING = "LOADING"
    SUCCESS = "SUCCESS"
    ERROR = "ERROR"


@dataclass(frozen=True)
class AppState:
    commune: str
    dataset_id: str
    year: str = SETTINGS.ALL_YEARS
    status: FetchStatus = FetchStatus.IDLE
    records: Tuple[DpeResult, ...] = field(default_factory=tuple)
    total: int = 0
    page: int = 1
    # jeton de la requête en cours : toute réponse portant un autre jeton est périmée
    request_token: int = 0
    error: Optional[str] = None

    @classmethod
    def initial(cls) -> "AppState":
        return cls(commune=SETTINGS.COMMUNES[0], dataset_id=SETTINGS.DEFAULT_DATASET_ID)


# --- Événements ---

@dataclass(frozen=True)
class Refresh:
    pass


@dataclass(frozen=True)
class SelectCommune:
    commune: str


@dataclass(frozen=True)
class SelectDataset:
    dataset_id: str


@dataclass(frozen=True)
class SelectYear:
    year: str


@dataclass(frozen=True)
class ChangePage:
    page: int


@dataclass(frozen=True)
class FetchSucceeded:
    token: int
    total: int
    records: Tuple[DpeResult, ...]


@dataclass(frozen=True)
class FetchFailed:
    token: int
    error: str


def _start_loading(state: AppState, **changes) -> AppState:
    # on vide les résultats précédents pour ne pas afficher de données périmées
    return replace(
        state,
        status=FetchStatus.LOADING,
        records=(),
        total=0,
        page=1,
        error=None,
        request_token=state.request_token + 1,
        **changes,
    )


def reduce(state: AppState, event) -> AppState:
    """Transition pure `(état, événement) -> état`."""
    if isinstance(event, Refresh):
        return _start_loading(state)

    if isinstance(event, SelectCommune):
        if event.commune == state.commune and state.status != FetchStatus.IDLE:
            return state
        return _start_loading(state, commune=event.commune)

    if isinstance(event, SelectDataset):
        if event.dataset_id == state.dataset_id and state.status != FetchStatus.IDLE:
            return state
        return _start_loading(state, dataset_id=event.dataset_id)

    if isinstance(event, SelectYear):
        if event.year == state.year:
            return state
        return replace(state, year=event.year, page=1)

    if isinstance(event, ChangePage):
        return replace(state, page=max(1, event.page))

    if isinstance(event, FetchSucceeded):
        if event.token != state.request_token:
            logger.debug("Réponse périmée ignorée (jeton %s, courant %s)", event.token, state.request_token)
            return state
        return replace(
            state,
            status=FetchStatus.SUCCESS,
            records=tuple(event.records),
            total=event.total,
            error=None,
        )

    if isinstance(event, FetchFailed):
        if event.token != state.request_token:
            return state
        return replace(state, status=FetchStatus.ERROR, records=(), total=0, error=event.error)

    raise TypeError(f"Événement inconnu : {event!r}")


def needs_fetch(state: AppState) -> bool:
    return state.status == FetchStatus.LOADING


def run_pending_fetch(state: AppState, client: AdemeDPEClient):
    """Exécute la requête correspondant au jeton courant et renvoie l'événement de fin."""
    token = state.request_token
    try:
        res = client.fetch_by_commune(
            state.commune,
            size=SETTINGS.DEFAULT_RESULT_LIMIT,
            dataset_id=state.dataset_id,
        )
    except FetchError as e:
        logger.error("Erreur d'appel ADEME pour %s : %s", state.commune, e)
        return FetchFailed(token=token, error=str(e))
    return FetchSucceeded(token=token, total=res.total, records=tuple(res.results))
