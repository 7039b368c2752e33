"""
Pydantic Schema 模块。

包含请求/响应模型、配置模型、数据模型等。
"""

from oceangrid.schemas.api import (
    ErrorResponse,
    ProjectionRequest,
    ProjectionResponse,
    SimulationCreateResponse,
    SimulationInfoResponse,
    StepRequest,
    StepResponse,
)
from oceangrid.schemas.base import (
    CameraConfig,
    ProjectionConfig,
    SpectrumConfig,
)
from oceangrid.schemas.data import (
    CullMode,
    FrameSummary,
    LayerSummary,
    SimulationStatus,
)

__all__ = [
    # 基础配置
    "SpectrumConfig",
    "CameraConfig",
    "ProjectionConfig",
    # 数据模型
    "SimulationStatus",
    "CullMode",
    "LayerSummary",
    "FrameSummary",
    # API 请求/响应
    "SimulationCreateResponse",
    "SimulationInfoResponse",
    "StepRequest",
    "StepResponse",
    "ProjectionRequest",
    "ProjectionResponse",
    "ErrorResponse",
]
