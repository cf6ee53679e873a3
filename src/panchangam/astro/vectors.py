# astro/vectors.py

from __future__ import annotations

import math
from typing import Sequence

import numpy as np


def sind(deg: float) -> float:
    return math.sin(math.radians(deg))

def cosd(deg: float) -> float:
    return math.cos(math.radians(deg))

def tand(deg: float) -> float:
    return math.tan(math.radians(deg))


def vec3(v: Sequence[float]) -> np.ndarray:
    a = np.asarray(v, dtype=float)
    if a.shape != (3,):
        raise ValueError(f"expected a 3-vector, got shape {a.shape}")
    return a

def cross(a: Sequence[float], b: Sequence[float]) -> np.ndarray:
    return np.cross(vec3(a), vec3(b))

def dot(a: Sequence[float], b: Sequence[float]) -> float:
    return float(np.dot(vec3(a), vec3(b)))

def norm(a: Sequence[float]) -> float:
    return float(np.linalg.norm(vec3(a)))

def normalize(a: Sequence[float]) -> np.ndarray:
    """Unit vector along a. Raises ValueError for the zero vector."""
    v = vec3(a)
    n = np.linalg.norm(v)
    if n == 0.0:
        raise ValueError("cannot normalize the zero vector")
    return v / n


def angle_between(a: Sequence[float], b: Sequence[float]) -> float:
    """
    Angle between two vectors (radians, [0, pi]).

    Uses asin(|a x b| / |a||b|), which stays accurate for nearly parallel
    vectors, and reflects through pi/2 when the dot product is negative.
    """
    va, vb = vec3(a), vec3(b)
    normprod = float(np.linalg.norm(va) * np.linalg.norm(vb))
    if normprod == 0.0:
        raise ValueError("angle undefined for a zero vector")
    s = min(1.0, float(np.linalg.norm(np.cross(va, vb))) / normprod)
    theta = math.asin(s)
    if float(np.dot(va, vb)) < 0.0:
        theta = math.pi - theta
    return theta


def unit_vector(lon_rad: float, lat_rad: float) -> np.ndarray:
    """Direction cosines of a point given longitude-like and latitude-like angles."""
    cl = math.cos(lat_rad)
    return np.array([cl * math.cos(lon_rad), cl * math.sin(lon_rad), math.sin(lat_rad)])


def rotate_x(v: Sequence[float], angle_rad: float) -> np.ndarray:
    """Rotate a vector about the x axis by +angle (frame rotation ecliptic -> equator)."""
    c, s = math.cos(angle_rad), math.sin(angle_rad)
    R = np.array([[1.0, 0.0, 0.0], [0.0, c, -s], [0.0, s, c]])
    return R @ vec3(v)
