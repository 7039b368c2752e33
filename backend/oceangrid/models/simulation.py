"""
模拟实例记录定义。
"""

from dataclasses import dataclass
from typing import Optional

from oceangrid.schemas.base import SpectrumConfig
from oceangrid.schemas.data import FrameSummary, SimulationStatus
from oceangrid.services.generator import checksum
from oceangrid.services.simulation import OceanSimulation


@dataclass
class SimulationRecord:
    """存储中的海面模拟实例。"""

    simulation_id: str  # 实例 ID
    status: SimulationStatus  # 实例状态
    config: SpectrumConfig  # 修正后的波浪谱配置
    simulation: OceanSimulation  # 模拟实例
    last_frame: Optional[FrameSummary] = None  # 最近一帧摘要

    @property
    def checksum(self) -> str:
        return checksum(self.simulation.spectrum)
