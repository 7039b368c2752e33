"""
投影网格服务。

生成屏幕空间对齐的网格，并用插值矩阵把网格顶点重建为海平面上的世界坐标。
"""

import logging
from dataclasses import dataclass
from typing import Tuple

import numpy as np

from oceangrid.schemas.data import CullMode

logger = logging.getLogger(__name__)

# 单个网格允许的最大顶点数
MAX_VERTICES = 65000


@dataclass
class ScreenGrid:
    """屏幕空间网格。"""

    vertices: np.ndarray  # (num_x * num_y, 2)，uv ∈ [0, 1]²，索引 x + y * num_x
    indices: np.ndarray  # (num_triangles * 3,)
    num_x: int
    num_y: int


def grid_dimensions(width: int, height: int, resolution: int = 8) -> Tuple[int, int]:
    """
    由屏幕尺寸计算网格顶点数。

    Args:
        width: 屏幕宽（像素）
        height: 屏幕高（像素）
        resolution: 每个四边形覆盖的像素数，越大顶点越少

    Returns:
        (num_x, num_y)
    """
    if resolution <= 0:
        raise ValueError("resolution must be greater than 0")
    return width // resolution, height // resolution


def create_screen_grid(num_x: int, num_y: int) -> ScreenGrid:
    """
    创建屏幕空间网格。

    Args:
        num_x: x 方向顶点数
        num_y: y 方向顶点数

    Returns:
        ScreenGrid
    """
    if num_x < 2 or num_y < 2:
        raise ValueError("Screen grid needs at least 2 vertices per axis")
    if num_x * num_y > MAX_VERTICES:
        # 顶点过多时需要拆分网格
        raise ValueError(
            f"Too many vertices for one grid: {num_x * num_y} > {MAX_VERTICES}"
        )

    u = np.arange(num_x) / (num_x - 1.0)
    v = np.arange(num_y) / (num_y - 1.0)
    uu, vv = np.meshgrid(u, v)
    vertices = np.stack([uu.ravel(), vv.ravel()], axis=-1)

    x, y = np.meshgrid(np.arange(num_x - 1), np.arange(num_y - 1), indexing="ij")
    x = x.ravel()
    y = y.ravel()
    i00 = x + y * num_x
    i01 = x + (y + 1) * num_x
    i10 = (x + 1) + y * num_x
    i11 = (x + 1) + (y + 1) * num_x
    indices = np.stack([i00, i01, i10, i01, i11, i10], axis=-1).ravel()

    return ScreenGrid(vertices=vertices, indices=indices, num_x=num_x, num_y=num_y)


def reconstruct_world_positions(interpolation: np.ndarray, uv: np.ndarray) -> np.ndarray:
    """
    由插值矩阵重建网格顶点的世界坐标。

    四行依次对应角点 (0,0)、(1,0)、(1,1)、(0,1)。先在齐次空间双线性插值，
    再做透视除法（交点只在除法之后才是仿射的）。

    Args:
        interpolation: 4x4 插值矩阵
        uv: (M, 2) 屏幕空间坐标

    Returns:
        (M, 3) 世界坐标
    """
    uv = np.atleast_2d(np.asarray(uv, dtype=np.float64))
    u = uv[:, 0:1]
    v = uv[:, 1:2]

    bottom = interpolation[0] * (1.0 - u) + interpolation[1] * u
    top = interpolation[3] * (1.0 - u) + interpolation[2] * u
    p = bottom * (1.0 - v) + top * v

    return p[:, :3] / p[:, 3:4]


def cull_mode(is_flipped: bool) -> CullMode:
    """
    相机低于海平面时投影网格的三角形绕序翻转，需改为剔除正面。
    """
    return CullMode.FRONT if is_flipped else CullMode.BACK
