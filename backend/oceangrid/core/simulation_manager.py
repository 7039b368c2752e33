"""
模拟实例管理器。

提供实例的创建、获取、单步演化、删除等功能。
"""

import logging
import uuid
from typing import Optional

from oceangrid.core.config import settings
from oceangrid.core.storage import simulation_storage
from oceangrid.models.result import BoundaryResult
from oceangrid.models.simulation import SimulationRecord
from oceangrid.schemas.base import SpectrumConfig
from oceangrid.schemas.data import FrameSummary, LayerSummary, SimulationStatus
from oceangrid.services.evolver import NumpyTransformEngine
from oceangrid.services.simulation import OceanFrame, OceanSimulation

logger = logging.getLogger(__name__)


class SimulationLimitError(RuntimeError):
    """模拟实例数量达到上限。"""


def create_simulation(config: SpectrumConfig) -> SimulationRecord:
    """
    创建海面模拟实例（执行冷路径）。

    Args:
        config: 波浪谱配置

    Returns:
        实例记录
    """
    if len(simulation_storage) >= settings.max_simulations:
        raise SimulationLimitError(
            f"Simulation limit reached ({settings.max_simulations})"
        )

    simulation = OceanSimulation(
        config, engine=NumpyTransformEngine(config.fourier_size)
    )
    record = SimulationRecord(
        simulation_id=str(uuid.uuid4()),
        status=SimulationStatus.READY,
        config=config,
        simulation=simulation,
    )
    simulation_storage.add(record)
    logger.info(f"Created ocean simulation {record.simulation_id[:8]}...")
    return record


def get_simulation(simulation_id: str) -> Optional[SimulationRecord]:
    """
    获取模拟实例。

    Returns:
        实例记录，如果不存在则返回 None
    """
    return simulation_storage.get(simulation_id)


def summarize_frame(frame: OceanFrame) -> FrameSummary:
    """生成帧摘要。"""
    layers = []
    for layer, grid_size in enumerate(frame.grid_sizes):
        heights = frame.heights(layer)
        layers.append(
            LayerSummary(
                layer=layer,
                grid_size=grid_size,
                height_min=float(heights.min()),
                height_max=float(heights.max()),
                height_mean=float(heights.mean()),
            )
        )
    return FrameSummary(
        time=frame.time, buffer_index=frame.buffer_index, layers=layers
    )


def step_simulation(record: SimulationRecord, time: float) -> BoundaryResult:
    """
    单步演化并更新实例状态。

    Returns:
        边界结果，成功时 value 为 OceanFrame
    """
    result = record.simulation.step(time)
    if result.ok:
        record.status = SimulationStatus.RUNNING
        record.last_frame = summarize_frame(result.value)
    else:
        record.status = SimulationStatus.FAILED
    simulation_storage.update(record)
    return result


def delete_simulation(simulation_id: str) -> bool:
    """删除模拟实例，返回是否存在。"""
    removed = simulation_storage.remove(simulation_id)
    if removed:
        logger.info(f"Deleted ocean simulation {simulation_id[:8]}...")
    return removed
