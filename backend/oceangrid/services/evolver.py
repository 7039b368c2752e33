"""
频谱时间演化服务。

每帧把静态复振幅按色散关系旋转相位，组装成 Hermitian 对称的场频谱，
再交给（外部）批量二维逆 FFT 引擎得到实空间的高度、斜率与水平位移。
"""

import logging
import math
from typing import Optional, Protocol

import numpy as np

from oceangrid.models.spectrum import NUM_LAYERS, DispersionGrid, SpectralGrid
from oceangrid.schemas.base import SpectrumConfig
from oceangrid.utils.numerical import signed_indices

logger = logging.getLogger(__name__)

# 每次变换调用最多的网格数
MAX_BATCH = 5

# 每层输出的场
FIELDS = ("height", "slope_x", "slope_y", "displacement_x", "displacement_y")
NUM_FIELDS = len(FIELDS)


class TransformEngine(Protocol):
    """批量二维逆 FFT 引擎接口。"""

    def inverse_transform(self, grids: np.ndarray) -> np.ndarray:
        """输入 (B, N, N) Hermitian 复网格，返回 (B, N, N) 实网格。"""
        ...


class NumpyTransformEngine:
    """
    基于 numpy 的参考变换引擎。

    使用非归一化的逆变换（norm="forward"），即 h(x) = Σ H(k)·e^{ik·x}。
    """

    def __init__(self, size: int):
        self.size = size

    def inverse_transform(self, grids: np.ndarray) -> np.ndarray:
        if grids.ndim != 3:
            raise ValueError(f"Expected (batch, N, N) grids, got shape {grids.shape}")
        if grids.shape[0] > MAX_BATCH:
            raise ValueError(
                f"At most {MAX_BATCH} grids per call, got {grids.shape[0]}"
            )
        if grids.shape[1:] != (self.size, self.size):
            raise ValueError(
                f"Grid resolution {grids.shape[1:]} does not match engine size {self.size}"
            )
        return np.fft.ifft2(grids, axes=(-2, -1), norm="forward").real


def evolve(
    spectrum: SpectralGrid, dispersion_grid: DispersionGrid, t: float
) -> np.ndarray:
    """
    时间演化：h(k, t) = h0(k)·e^{iωt}。

    纯相位旋转，幅值不变。

    Args:
        spectrum: 静态复振幅网格
        dispersion_grid: 色散表
        t: 时间（秒）

    Returns:
        复振幅，shape: (4, N, N)
    """
    omega = np.moveaxis(dispersion_grid.omega, -1, 0)
    return spectrum.amplitudes * np.exp(1j * omega * t)


def hermitian(amplitudes: np.ndarray) -> np.ndarray:
    """
    组装 Hermitian 对称频谱 H(k) = h(k) + conj(h(-k))。

    Args:
        amplitudes: shape (..., N, N)

    Returns:
        满足 H(-k) = conj(H(k)) 的频谱
    """
    mirrored = np.roll(np.flip(amplitudes, axis=(-2, -1)), shift=1, axis=(-2, -1))
    return amplitudes + np.conj(mirrored)


def field_spectra(spectrum: np.ndarray, config: SpectrumConfig) -> np.ndarray:
    """
    由 Hermitian 高度频谱组装每层 5 个场的频谱。

    高度 H；斜率 i·kx·H、i·ky·H；水平位移 -i·kx/|k|·H、-i·ky/|k|·H（|k| = 0 处为 0）。
    高度场保留奈奎斯特分量。

    Args:
        spectrum: Hermitian 高度频谱，shape: (4, N, N)
        config: 波浪谱配置

    Returns:
        shape: (4, 5, N, N)
    """
    n = config.fourier_size
    # 奈奎斯特频率没有对称的负频率，导数场在该处置零以保持 Hermitian
    idx = signed_indices(n)
    idx = np.where(idx == -n / 2, 0.0, idx)
    j, i = np.meshgrid(idx, idx, indexing="ij")

    out = np.empty((NUM_LAYERS, NUM_FIELDS, n, n), dtype=np.complex128)
    for layer, length_scale in enumerate(config.grid_sizes):
        dk = 2.0 * math.pi / length_scale
        kx = i * dk
        ky = j * dk
        k = np.hypot(kx, ky)
        inv_k = np.divide(1.0, k, out=np.zeros_like(k), where=k > 0.0)

        h = spectrum[layer]
        out[layer, 0] = h
        out[layer, 1] = 1j * kx * h
        out[layer, 2] = 1j * ky * h
        out[layer, 3] = -1j * kx * inv_k * h
        out[layer, 4] = -1j * ky * inv_k * h

    return out


class SpectrumEvolver:
    """
    频谱演化器。

    持有只读的静态谱与色散表，每帧产出交给变换引擎的场频谱并取回实空间图。
    """

    def __init__(
        self,
        config: SpectrumConfig,
        spectrum: SpectralGrid,
        dispersion_grid: DispersionGrid,
    ):
        if spectrum.size != dispersion_grid.size:
            raise ValueError(
                f"Spectrum size {spectrum.size} does not match "
                f"dispersion table size {dispersion_grid.size}"
            )
        self.config = config
        self.spectrum = spectrum
        self.dispersion_grid = dispersion_grid

    def evolve(self, t: float) -> np.ndarray:
        """时间 t 的复振幅，shape: (4, N, N)。"""
        return evolve(self.spectrum, self.dispersion_grid, t)

    def spectra(self, t: float) -> np.ndarray:
        """时间 t 的场频谱，shape: (4, 5, N, N)。"""
        return field_spectra(hermitian(self.evolve(t)), self.config)

    def transform(self, t: float, engine: Optional[TransformEngine]) -> np.ndarray:
        """
        计算时间 t 的实空间图。

        每层一次批量调用（5 个场）。引擎异常直接向上抛出，由调用方报告。

        Returns:
            shape: (4, 5, N, N)，索引为 [layer, field, y, x]
        """
        if engine is None:
            raise ValueError("Transform engine is required")

        spectra = self.spectra(t)
        n = self.config.fourier_size
        maps = np.empty((NUM_LAYERS, NUM_FIELDS, n, n))
        for layer in range(NUM_LAYERS):
            maps[layer] = engine.inverse_transform(spectra[layer])
        return maps
