# -*- coding: utf-8 -*-
"""Tests pour la barre latérale (clé de l'export global)."""

from __future__ import annotations

from config import SETTINGS
from ui.components.sidebar import bulk_export_key


def test_bulk_export_key_depends_on_dataset():
    keys = {bulk_export_key(ds.id) for ds in SETTINGS.DATASETS}
    assert len(keys) == len(SETTINGS.DATASETS)


def test_bulk_export_key_stable():
    assert bulk_export_key("dpe03existant") == bulk_export_key("dpe03existant")
