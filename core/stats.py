# core/stats.py
"""Vues dérivées du jeu de résultats courant : filtre par année, indicateurs, pagination."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, List, Sequence

from config import SETTINGS
from core.dpe_record import NUMERIC_FIELDS, DpeResult

_ALL_YEARS = {SETTINGS.ALL_YEARS.lower(), "all", ""}


@dataclass(frozen=True)
class AggregateStats:
    count: int
    average: float
    passoires: int
    percent_passoires: float


@dataclass(frozen=True)
class Page:
    items: List[DpeResult]
    number: int
    page_count: int
    total: int

    @property
    def has_previous(self) -> bool:
        return self.number > 1

    @property
    def has_next(self) -> bool:
        return self.number < self.page_count


def filter_by_year(records: Sequence[DpeResult], year: str) -> List[DpeResult]:
    """Garde les DPE établis l'année `year` ; tous si « Toutes »."""
    if year is None or str(year).strip().lower() in _ALL_YEARS:
        return list(records)
    year = str(year).strip()
    return [
        r for r in records
        if r.date_etablissement_dpe and r.date_etablissement_dpe.startswith(year)
    ]


def compute_stats(records: Sequence[DpeResult], metric: str = "conso_5_usages_m2_an") -> AggregateStats:
    if metric not in NUMERIC_FIELDS:
        raise ValueError(f"Indicateur inconnu : {metric!r}")

    values = [getattr(r, metric) for r in records]
    valid = [v for v in values if v > 0]
    average = sum(valid) / len(valid) if valid else 0.0

    passoires = sum(1 for r in records if r.etiquette_dpe in SETTINGS.PASSOIRE_GRADES)
    percent = passoires / len(records) * 100 if records else 0.0
    return AggregateStats(
        count=len(records),
        average=average,
        passoires=passoires,
        percent_passoires=percent,
    )


def grade_distribution(records: Sequence[DpeResult]) -> Dict[str, int]:
    counts = {g: 0 for g in SETTINGS.GRADES}
    for r in records:
        if r.etiquette_dpe in counts:
            counts[r.etiquette_dpe] += 1
    return counts


def paginate(records: Sequence[DpeResult], page_size: int, page: int) -> Page:
    if page_size < 1:
        raise ValueError("page_size doit être >= 1")
    total = len(records)
    page_count = max(1, math.ceil(total / page_size))
    number = min(max(1, page), page_count)
    start = (number - 1) * page_size
    return Page(
        items=list(records[start:start + page_size]),
        number=number,
        page_count=page_count,
        total=total,
    )
