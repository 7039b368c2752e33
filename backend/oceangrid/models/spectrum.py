"""
波浪谱网格模型定义。
"""

from dataclasses import dataclass

import numpy as np

# 四个长度尺度
NUM_LAYERS = 4


@dataclass(frozen=True)
class SpectralGrid:
    """
    静态复振幅网格。

    两个 N×N×4 数组，每格存两对（实部, 虚部）：
    spectrum01 覆盖第 0、1 层，spectrum23 覆盖第 2、3 层。
    数组索引为 [y, x, channel]。
    """

    spectrum01: np.ndarray  # shape: (N, N, 4)
    spectrum23: np.ndarray  # shape: (N, N, 4)

    @property
    def size(self) -> int:
        """网格尺寸 N。"""
        return self.spectrum01.shape[0]

    @property
    def amplitudes(self) -> np.ndarray:
        """复振幅视图，shape: (4, N, N)，索引为 [layer, y, x]。"""
        packed = np.concatenate([self.spectrum01, self.spectrum23], axis=-1)
        real = packed[..., 0::2]
        imag = packed[..., 1::2]
        return np.moveaxis(real + 1j * imag, -1, 0)

    @classmethod
    def from_amplitudes(cls, amplitudes: np.ndarray) -> "SpectralGrid":
        """由 (4, N, N) 复振幅构造。"""
        channels = np.empty(amplitudes.shape[1:] + (2 * NUM_LAYERS,))
        layers = np.moveaxis(amplitudes, 0, -1)
        channels[..., 0::2] = layers.real
        channels[..., 1::2] = layers.imag
        spectrum01 = np.ascontiguousarray(channels[..., :4])
        spectrum23 = np.ascontiguousarray(channels[..., 4:])
        spectrum01.setflags(write=False)
        spectrum23.setflags(write=False)
        return cls(spectrum01=spectrum01, spectrum23=spectrum23)


@dataclass(frozen=True)
class DispersionGrid:
    """每格每层的角频率 ω(k)，shape: (N, N, 4)，索引为 [y, x, layer]。"""

    omega: np.ndarray

    @property
    def size(self) -> int:
        """网格尺寸 N。"""
        return self.omega.shape[0]

    def layer(self, index: int) -> np.ndarray:
        """取某一层的角频率，shape: (N, N)。"""
        return self.omega[..., index]
