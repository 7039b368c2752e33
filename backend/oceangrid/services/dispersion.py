"""
色散表服务。

预计算每个频率格点、每个长度尺度上的角频率，网格尺寸变化时需重建。
"""

import math

import numpy as np

from oceangrid.models.spectrum import DispersionGrid
from oceangrid.schemas.base import SpectrumConfig
from oceangrid.services.spectrum import dispersion


def inverse_grid_sizes(config: SpectrumConfig) -> np.ndarray:
    """每层的逆网格尺寸因子 2π·N/L。"""
    factor = 2.0 * math.pi * config.fourier_size
    return np.array([factor / size for size in config.grid_sizes])


def build_dispersion_table(config: SpectrumConfig) -> DispersionGrid:
    """
    构建色散表。

    每格的归一化有符号坐标 st ∈ [-0.5, 0.5)，乘以各层逆网格尺寸得到 |k|，
    再代入色散关系。

    Args:
        config: 波浪谱配置

    Returns:
        DispersionGrid，shape: (N, N, 4)
    """
    n = config.fourier_size
    uv = np.arange(n, dtype=np.float64) / n
    st = np.where(uv >= 0.5, uv - 1.0, uv)

    st_y, st_x = np.meshgrid(st, st, indexing="ij")
    radius = np.hypot(st_x, st_y)

    k = radius[..., np.newaxis] * inverse_grid_sizes(config)
    omega = dispersion(k)
    omega.setflags(write=False)
    return DispersionGrid(omega=omega)
