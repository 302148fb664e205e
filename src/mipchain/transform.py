"""
2D Transform Mathematics

Small matrix helpers for the UV transforms fed to the renderer and the
LOD selector.

Conventions:
- Row vectors on the left: p' = p @ M
- Matrices are indexed [row][column]
- Composition reads left to right: p @ (A @ B) applies A first, then B
- 3x3 matrices are homogeneous; translation lives in the last row

    | cos  sin  0 |
    | -sin cos  0 |     rotation33(theta)
    | 0    0    1 |

    | 1   0   0 |
    | 0   1   0 |       translation33(tx, ty)
    | tx  ty  1 |
"""

from typing import Sequence, Union
import math
import numpy as np


def identity22() -> np.ndarray:
    """2x2 identity."""
    return np.eye(2, dtype=np.float64)


def identity33() -> np.ndarray:
    """3x3 homogeneous identity."""
    return np.eye(3, dtype=np.float64)


def rotation22(theta: float) -> np.ndarray:
    """
    2x2 rotation by theta radians.

    Args:
        theta: Angle in radians

    Returns:
        Rotation matrix for row vectors
    """
    s = math.sin(theta)
    c = math.cos(theta)
    return np.array([
        [c, s],
        [-s, c]
    ], dtype=np.float64)


def rotation33(theta: float) -> np.ndarray:
    """3x3 homogeneous rotation by theta radians."""
    m = identity33()
    m[:2, :2] = rotation22(theta)
    return m


def scale22(sx: float, sy: Union[float, None] = None) -> np.ndarray:
    """2x2 scale; uniform when sy is omitted."""
    if sy is None:
        sy = sx
    return np.array([
        [sx, 0.0],
        [0.0, sy]
    ], dtype=np.float64)


def scale33(sx: float, sy: Union[float, None] = None) -> np.ndarray:
    """3x3 homogeneous scale; uniform when sy is omitted."""
    m = identity33()
    m[:2, :2] = scale22(sx, sy)
    return m


def translation33(tx: float, ty: float) -> np.ndarray:
    """3x3 homogeneous translation."""
    m = identity33()
    m[2, 0] = tx
    m[2, 1] = ty
    return m


def compose(*matrices: np.ndarray) -> np.ndarray:
    """
    Multiply matrices left to right.

    compose(A, B, C) == A @ B @ C, i.e. A is applied first to a row vector.
    """
    if not matrices:
        raise ValueError("compose() needs at least one matrix")
    result = np.asarray(matrices[0], dtype=np.float64)
    for m in matrices[1:]:
        result = result @ np.asarray(m, dtype=np.float64)
    return result


def transform_point(point: Sequence[float], matrix: np.ndarray) -> np.ndarray:
    """
    Apply a 2x2 or 3x3 matrix to a 2D point.

    Args:
        point: (x, y)
        matrix: 2x2 linear or 3x3 homogeneous matrix

    Returns:
        Transformed (x, y)
    """
    matrix = check_matrix(matrix)
    p = np.asarray(point, dtype=np.float64)
    if matrix.shape == (3, 3):
        return (np.array([p[0], p[1], 1.0]) @ matrix)[:2]
    return p @ matrix


def dot(a: Sequence[float], b: Sequence[float]) -> float:
    """Dot product of two vectors."""
    return float(np.dot(np.asarray(a, dtype=np.float64), np.asarray(b, dtype=np.float64)))


def degrees_to_radians(degrees: float) -> float:
    """Convert degrees to radians."""
    return degrees * math.pi / 180.0


def check_matrix(matrix) -> np.ndarray:
    """Validate and convert a 2x2 or 3x3 matrix."""
    m = np.asarray(matrix, dtype=np.float64)
    if m.shape not in ((2, 2), (3, 3)):
        raise ValueError(f"Expected a 2x2 or 3x3 matrix, got shape {m.shape}")
    return m


def linear_part(matrix) -> np.ndarray:
    """
    Get the 2x2 linear part of a transform, dropping translation.

    Args:
        matrix: 2x2 or 3x3 matrix

    Returns:
        2x2 matrix
    """
    return check_matrix(matrix)[:2, :2].copy()
