"""
矩阵与几何工具。

提供 OpenGL 约定（视空间看向 -Z，裁剪空间 z ∈ [-1, 1]）的视图/投影矩阵构造、
齐次变换以及线段-平面求交。
"""

import math
from typing import Optional

import numpy as np

from oceangrid.utils.numerical import EPSILON, safe_normalize

WORLD_UP = np.array([0.0, 1.0, 0.0])

# 视线与 up 平行时使用的备用 up
FALLBACK_UP = np.array([0.0, 0.0, 1.0])


def look_at(
    position: np.ndarray,
    target: np.ndarray,
    up: np.ndarray = WORLD_UP,
) -> np.ndarray:
    """
    构造看向 target 的视图矩阵（世界 -> 视空间）。

    up 与视线平行时改用 FALLBACK_UP，保证矩阵非奇异。

    Args:
        position: 观察点（世界坐标）
        target: 目标点（世界坐标）
        up: 上方向

    Returns:
        4x4 视图矩阵
    """
    position = np.asarray(position, dtype=np.float64)
    target = np.asarray(target, dtype=np.float64)

    zaxis = safe_normalize(position - target)
    if not zaxis.any():
        zaxis = FALLBACK_UP.copy()

    xaxis = safe_normalize(np.cross(up, zaxis))
    if not xaxis.any():
        xaxis = safe_normalize(np.cross(FALLBACK_UP, zaxis))
    if not xaxis.any():
        xaxis = safe_normalize(np.cross(WORLD_UP, zaxis))
    yaxis = np.cross(zaxis, xaxis)

    view = np.identity(4)
    view[0, :3] = xaxis
    view[1, :3] = yaxis
    view[2, :3] = zaxis
    view[:3, 3] = -view[:3, :3] @ position
    return view


def perspective(fov_deg: float, aspect: float, near: float, far: float) -> np.ndarray:
    """
    构造透视投影矩阵（OpenGL 约定）。

    Args:
        fov_deg: 垂直视场角（度）
        aspect: 宽高比
        near: 近裁剪面距离
        far: 远裁剪面距离

    Returns:
        4x4 投影矩阵
    """
    f = 1.0 / math.tan(math.radians(fov_deg) / 2.0)
    proj = np.zeros((4, 4))
    proj[0, 0] = f / aspect
    proj[1, 1] = f
    proj[2, 2] = (far + near) / (near - far)
    proj[2, 3] = 2.0 * far * near / (near - far)
    proj[3, 2] = -1.0
    return proj


def transform_point(m: np.ndarray, point: np.ndarray) -> np.ndarray:
    """用 4x4 矩阵变换 3D 点并做透视除法。"""
    p = m @ np.append(np.asarray(point, dtype=np.float64), 1.0)
    if abs(p[3]) < EPSILON:
        return p[:3]
    return p[:3] / p[3]


def segment_plane_intersection(
    a: np.ndarray, b: np.ndarray, normal: np.ndarray, d: float
) -> Optional[np.ndarray]:
    """
    求线段 a->b 与平面 n·p = d 的交点。

    线段参数化为 a + t(b - a)，t = (d - n·a) / (n·(b - a))，只接受 t ∈ (0, 1]。

    Returns:
        交点；不相交或线段与平面平行时返回 None
    """
    ab = b - a
    denom = float(np.dot(normal, ab))
    if abs(denom) < EPSILON:
        return None

    t = (d - float(np.dot(normal, a))) / denom
    if 0.0 < t <= 1.0:
        return a + t * ab
    return None
