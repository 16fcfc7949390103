# -*- coding: utf-8 -*-
"""Tests pour l'état de la vue (ui.state) : transitions pures et jeton de requête."""

from __future__ import annotations

import logging
from dataclasses import replace
from unittest.mock import MagicMock

import pytest

from config import SETTINGS
from data_adapters.ademe_client import FetchError, FetchResult
from ui.state import (
    AppState,
    ChangePage,
    FetchFailed,
    FetchStatus,
    FetchSucceeded,
    Refresh,
    SelectCommune,
    SelectDataset,
    SelectYear,
    needs_fetch,
    reduce,
    run_pending_fetch,
)


@pytest.fixture
def loaded_state(sample_records) -> AppState:
    state = reduce(AppState.initial(), Refresh())
    return reduce(state, FetchSucceeded(state.request_token, 3, tuple(sample_records)))


class TestInitial:

    def test_defaults(self):
        state = AppState.initial()
        assert state.commune == SETTINGS.COMMUNES[0]
        assert state.dataset_id == SETTINGS.DATASETS[0].id
        assert state.year == SETTINGS.ALL_YEARS
        assert state.status == FetchStatus.IDLE
        assert state.records == ()
        assert not needs_fetch(state)


class TestLoadingTransitions:

    def test_refresh_enters_loading(self):
        state = reduce(AppState.initial(), Refresh())
        assert state.status == FetchStatus.LOADING
        assert state.request_token == 1
        assert needs_fetch(state)

    def test_select_commune_clears_previous_results(self, loaded_state):
        state = reduce(replace(loaded_state, page=3), SelectCommune("Villerupt"))
        assert state.commune == "Villerupt"
        assert state.status == FetchStatus.LOADING
        assert state.records == ()
        assert state.total == 0
        assert state.page == 1
        assert state.request_token == loaded_state.request_token + 1

    def test_select_dataset(self, loaded_state):
        state = reduce(loaded_state, SelectDataset("dpe-france"))
        assert state.dataset_id == "dpe-france"
        assert state.status == FetchStatus.LOADING
        assert state.records == ()

    def test_same_selection_is_noop(self, loaded_state):
        assert reduce(loaded_state, SelectCommune(loaded_state.commune)) is loaded_state
        assert reduce(loaded_state, SelectDataset(loaded_state.dataset_id)) is loaded_state

    def test_same_selection_from_idle_loads(self):
        state = AppState.initial()
        assert reduce(state, SelectCommune(state.commune)).status == FetchStatus.LOADING

    def test_input_state_unchanged(self, loaded_state):
        before = loaded_state
        reduce(loaded_state, SelectCommune("Thil"))
        assert loaded_state == before
        assert loaded_state.status == FetchStatus.SUCCESS


class TestSettlement:

    def test_success(self, loaded_state, sample_records):
        assert loaded_state.status == FetchStatus.SUCCESS
        assert loaded_state.records == tuple(sample_records)
        assert loaded_state.total == 3

    def test_failure(self):
        state = reduce(AppState.initial(), Refresh())
        state = reduce(state, FetchFailed(state.request_token, "Erreur API ADEME (500)"))
        assert state.status == FetchStatus.ERROR
        assert state.error == "Erreur API ADEME (500)"
        assert state.records == ()

    def test_stale_success_discarded(self, sample_records):
        state = reduce(AppState.initial(), SelectCommune("Longwy"))
        stale_token = state.request_token
        state = reduce(state, SelectCommune("Thil"))

        after = reduce(state, FetchSucceeded(stale_token, 3, tuple(sample_records)))
        assert after is state
        assert after.status == FetchStatus.LOADING
        assert after.records == ()

    def test_stale_failure_discarded(self, loaded_state):
        state = reduce(loaded_state, FetchFailed(loaded_state.request_token - 1, "boom"))
        assert state is loaded_state

    def test_slow_earlier_response_does_not_overwrite_later(self, record_factory):
        state = reduce(AppState.initial(), SelectCommune("Longwy"))
        first = state.request_token
        state = reduce(state, SelectCommune("Thil"))
        second = state.request_token

        thil = (record_factory(n_dpe="thil"),)
        longwy = (record_factory(n_dpe="longwy"),)
        state = reduce(state, FetchSucceeded(second, 1, thil))
        state = reduce(state, FetchSucceeded(first, 1, longwy))
        assert state.records == thil


class TestLocalTransitions:

    def test_year_does_not_refetch(self, loaded_state):
        state = reduce(replace(loaded_state, page=4), SelectYear("2024"))
        assert state.year == "2024"
        assert state.page == 1
        assert state.status == FetchStatus.SUCCESS
        assert state.request_token == loaded_state.request_token
        assert state.records == loaded_state.records

    def test_same_year_is_noop(self, loaded_state):
        assert reduce(loaded_state, SelectYear(loaded_state.year)) is loaded_state

    @pytest.mark.parametrize("page, expected", [(2, 2), (0, 1), (-1, 1)])
    def test_change_page(self, loaded_state, page, expected):
        assert reduce(loaded_state, ChangePage(page)).page == expected

    def test_unknown_event(self, loaded_state):
        with pytest.raises(TypeError):
            reduce(loaded_state, object())


class TestRunPendingFetch:

    def test_success_event(self, record_factory):
        state = reduce(AppState.initial(), SelectCommune("Thil"))
        client = MagicMock()
        client.fetch_by_commune.return_value = FetchResult(total=7, results=[record_factory(n_dpe="x")])

        event = run_pending_fetch(state, client)

        assert isinstance(event, FetchSucceeded)
        assert event.token == state.request_token
        assert event.total == 7
        client.fetch_by_commune.assert_called_once_with(
            "Thil", size=SETTINGS.DEFAULT_RESULT_LIMIT, dataset_id=state.dataset_id,
        )
        assert reduce(state, event).status == FetchStatus.SUCCESS

    def test_failure_event(self):
        state = reduce(AppState.initial(), Refresh())
        client = MagicMock()
        client.fetch_by_commune.side_effect = FetchError("Erreur API ADEME (404): not found", status_code=404)

        event = run_pending_fetch(state, client)

        assert isinstance(event, FetchFailed)
        assert "404" in event.error
        assert reduce(state, event).status == FetchStatus.ERROR

    def test_failure_logged_once(self, caplog):
        state = reduce(AppState.initial(), Refresh())
        client = MagicMock()
        client.fetch_by_commune.side_effect = FetchError("Erreur API ADEME (500): KO", status_code=500)

        with caplog.at_level(logging.DEBUG, logger="dpe_hub"):
            run_pending_fetch(state, client)

        errors = [r for r in caplog.records if r.levelno >= logging.ERROR]
        assert len(errors) == 1
        assert state.commune in errors[0].getMessage()
