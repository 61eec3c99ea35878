# geo/geodesy.py
import math

import numpy as np

EARTH_RADIUS_MI = 3963.0


def haversine_mi(lon1: float, lat1: float, lon2: float, lat2: float) -> float:
    """Great-circle distance in miles (haversine)."""
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlambda = math.radians(lon2 - lon1)

    a = math.sin(dphi / 2.0) * math.sin(dphi / 2.0)
    a += math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2.0) * math.sin(dlambda / 2.0)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_MI * c


def haversine_mi_many(lon: float, lat: float, lons: np.ndarray, lats: np.ndarray) -> np.ndarray:
    """Distances from one point to many, same formula as haversine_mi."""
    phi1 = np.radians(lat)
    phi2 = np.radians(lats)
    dphi = np.radians(lats - lat)
    dlambda = np.radians(lons - lon)

    a = np.sin(dphi / 2.0) ** 2 + np.cos(phi1) * np.cos(phi2) * np.sin(dlambda / 2.0) ** 2
    c = 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a))
    return EARTH_RADIUS_MI * c


def initial_bearing_deg(lon1: float, lat1: float, lon2: float, lat2: float) -> float:
    """Initial bearing from point 1 towards point 2, degrees in (-180, 180]."""
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    lambda1, lambda2 = math.radians(lon1), math.radians(lon2)

    y = math.sin(lambda2 - lambda1) * math.cos(phi2)
    x = math.cos(phi1) * math.sin(phi2)
    x -= math.sin(phi1) * math.cos(phi2) * math.cos(lambda2 - lambda1)
    return math.degrees(math.atan2(y, x))
