"""
海面模拟服务。

宿主每帧调用 step()：冷路径（谱生成、色散表、方差修正）在构造或重新配置时执行，
热路径（相位演化 + 逆变换）每帧执行一次，结果写入双缓冲。
"""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from oceangrid.models.buffers import PingPongBuffer
from oceangrid.models.result import BoundaryErrorKind, BoundaryResult
from oceangrid.models.spectrum import NUM_LAYERS, DispersionGrid, SpectralGrid
from oceangrid.schemas.base import SpectrumConfig
from oceangrid.services.dispersion import build_dispersion_table
from oceangrid.services.evolver import NUM_FIELDS, SpectrumEvolver, TransformEngine
from oceangrid.services.generator import SpectrumGenerator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OceanFrame:
    """单帧输出（渲染边界）。"""

    time: float  # 时间（秒）
    maps: np.ndarray  # (4, 5, N, N)，[layer, field, y, x]；缓冲槽视图，再写入两次后被覆盖
    choppiness: Tuple[float, float, float, float]  # 每层水平位移强度
    grid_sizes: Tuple[float, float, float, float]  # 每层长度尺度
    variance_correction: float  # 斜率方差修正值
    buffer_index: int  # 本帧写入的槽

    def heights(self, layer: int) -> np.ndarray:
        """某一层的高度图。"""
        return self.maps[layer, 0]


class OceanSimulation:
    """
    海面模拟实例。

    SpectralGrid / DispersionGrid 由实例拥有，配置改变时整体重建。
    """

    def __init__(
        self, config: SpectrumConfig, engine: Optional[TransformEngine] = None
    ):
        self.engine = engine
        self.time = 0.0
        self.config: SpectrumConfig
        self.spectrum: SpectralGrid
        self.dispersion_grid: DispersionGrid
        self.variance_correction: float
        self.evolver: SpectrumEvolver
        self.buffers: PingPongBuffer
        self.reconfigure(config)

    def reconfigure(self, config: SpectrumConfig) -> None:
        """整体重建冷路径数据。"""
        n = config.fourier_size
        generator = SpectrumGenerator(seed=config.seed)

        self.config = config
        self.spectrum, self.variance_correction = generator.generate(config)
        self.dispersion_grid = build_dispersion_table(config)
        self.evolver = SpectrumEvolver(config, self.spectrum, self.dispersion_grid)
        self.buffers = PingPongBuffer((NUM_LAYERS, NUM_FIELDS, n, n))

        logger.info(
            f"Ocean spectrum generated: N={n}, seed={config.seed}, "
            f"variance correction={self.variance_correction:.6g}"
        )

    @property
    def maps(self) -> np.ndarray:
        """最后写入的空间图。"""
        return self.buffers.read()

    def step(self, time: float) -> BoundaryResult:
        """
        计算时间 time 的空间图。

        没有变换引擎时跳过本帧；引擎出错时报告错误，不重试。

        Args:
            time: 绝对时间（秒）

        Returns:
            成功时 value 为 OceanFrame
        """
        if self.engine is None:
            logger.warning("No transform engine available, skipping frame")
            return BoundaryResult.failure(
                BoundaryErrorKind.MISSING_ENGINE, "transform engine is required"
            )

        try:
            maps = self.evolver.transform(time, self.engine)
        except Exception as e:
            logger.error(f"Transform engine failed at t={time}: {e}")
            return BoundaryResult.failure(BoundaryErrorKind.TRANSFORM_FAILED, str(e))

        self.time = time
        written = self.buffers.write(maps)

        frame = OceanFrame(
            time=time,
            maps=self.buffers.read(),
            choppiness=self.config.choppiness,
            grid_sizes=self.config.grid_sizes,
            variance_correction=self.variance_correction,
            buffer_index=written,
        )
        return BoundaryResult.success(frame)

    def advance(self, dt: float) -> BoundaryResult:
        """推进 dt 秒。"""
        return self.step(self.time + dt)
