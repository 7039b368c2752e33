"""
数据 Schema 定义。

包含模拟状态、帧摘要、投影结果等数据模型。
"""

from enum import Enum
from typing import List

from pydantic import BaseModel, Field


class SimulationStatus(str, Enum):
    """海面模拟实例状态枚举。"""

    READY = "ready"
    RUNNING = "running"
    FAILED = "failed"


class CullMode(str, Enum):
    """渲染边界的面剔除模式。"""

    FRONT = "front"
    BACK = "back"


class LayerSummary(BaseModel):
    """某一层高度图的统计摘要。"""

    layer: int = Field(..., description="层索引（0 为最大长度尺度）")
    grid_size: float = Field(..., description="该层长度尺度（米）")
    height_min: float = Field(..., description="最小高度（米）")
    height_max: float = Field(..., description="最大高度（米）")
    height_mean: float = Field(..., description="平均高度（米）")


class FrameSummary(BaseModel):
    """某一时刻海面高度场的摘要。"""

    time: float = Field(..., description="时间（秒）")
    buffer_index: int = Field(..., description="本帧写入的双缓冲槽")
    layers: List[LayerSummary] = Field(..., description="各层高度统计")
