from typing import List, Optional, Tuple

import numpy as np
import pandas as pd

from config import SETTINGS


def centroid(points: List[Tuple[float, float]]) -> Tuple[float, float]:
    """Retourne (lat, lon) du barycentre d'une liste de points (lat, lon)."""
    if not points:
        return (46.5, 2.5)  # centre France approx
    arr = np.array(points)
    lat = float(arr[:, 0].mean())
    lon = float(arr[:, 1].mean())
    return lat, lon


def hex_to_rgb(color: str) -> List[int]:
    c = color.lstrip("#")
    return [int(c[i:i + 2], 16) for i in (0, 2, 4)]


def valid_points(df: pd.DataFrame) -> pd.DataFrame:
    """
    Lignes avec des coordonnées exploitables : conversion numérique,
    suppression des valeurs absentes, illisibles ou hors bornes.
    """
    if df.empty:
        return df.assign(lat=pd.Series(dtype=float), lon=pd.Series(dtype=float))
    out = df.copy()
    out["lat"] = pd.to_numeric(out["latitude"], errors="coerce")
    out["lon"] = pd.to_numeric(out["longitude"], errors="coerce")
    out = out.dropna(subset=["lat", "lon"])
    out = out[out["lat"].between(-90, 90) & out["lon"].between(-180, 180)]
    return out.reset_index(drop=True)


def map_center(commune: str, points: Optional[pd.DataFrame] = None) -> Tuple[float, float]:
    """Centre de carte : coordonnées connues de la commune, sinon barycentre des points."""
    if commune in SETTINGS.COMMUNE_COORDS:
        return SETTINGS.COMMUNE_COORDS[commune]
    pts = [] if points is None or points.empty else list(zip(points["lat"], points["lon"]))
    return centroid(pts)
