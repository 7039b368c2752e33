"""
API 请求/响应 Schema 定义。
"""

from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, Field

from oceangrid.schemas.base import CameraConfig, ProjectionConfig, SpectrumConfig
from oceangrid.schemas.data import CullMode, FrameSummary, SimulationStatus

Matrix4 = Tuple[
    Tuple[float, float, float, float],
    Tuple[float, float, float, float],
    Tuple[float, float, float, float],
    Tuple[float, float, float, float],
]


class SimulationCreateResponse(BaseModel):
    """创建海面模拟实例的响应。"""

    simulation_id: str = Field(..., description="模拟实例唯一 ID")
    status: SimulationStatus = Field(..., description="实例状态")
    fourier_size: int = Field(..., description="修正后的傅里叶网格尺寸")
    variance_correction: float = Field(..., description="斜率方差修正值")
    checksum: str = Field(..., description="谱网格 SHA-256 摘要")


class SimulationInfoResponse(BaseModel):
    """模拟实例信息。"""

    simulation_id: str = Field(..., description="模拟实例 ID")
    status: SimulationStatus = Field(..., description="实例状态")
    config: SpectrumConfig = Field(..., description="修正后的波浪谱配置")
    time: float = Field(..., description="最近一帧时间（秒）")
    last_frame: Optional[FrameSummary] = Field(
        default=None, description="最近一帧摘要"
    )


class StepRequest(BaseModel):
    """单步演化请求体。"""

    time: float = Field(..., ge=0, description="绝对时间（秒）", examples=[1.5])
    include_heights: bool = Field(
        default=False, description="是否返回第 0 层高度图"
    )


class StepResponse(BaseModel):
    """单步演化响应。"""

    simulation_id: str = Field(..., description="模拟实例 ID")
    frame: FrameSummary = Field(..., description="帧摘要")
    heights: Optional[List[List[float]]] = Field(
        default=None, description="第 0 层高度图（N×N）"
    )


class ProjectionRequest(BaseModel):
    """投影求解请求体。"""

    camera: CameraConfig
    projection: ProjectionConfig = Field(default_factory=ProjectionConfig)


class ProjectionResponse(BaseModel):
    """投影求解响应。"""

    is_flipped: bool = Field(..., description="相机是否在海平面以下")
    cull_mode: CullMode = Field(..., description="面剔除模式")
    visible: bool = Field(..., description="海面在本帧是否可见")
    projector_vp: Matrix4 = Field(..., description="投影器视图投影矩阵（含范围修正）")
    interpolation: Matrix4 = Field(..., description="插值矩阵，每行为角点齐次世界坐标")
    projector_position: Tuple[float, float, float] = Field(
        ..., description="重新瞄准后的投影器位置"
    )


class ErrorResponse(BaseModel):
    """通用错误响应。"""

    code: str = Field(..., description="错误码")
    message: str = Field(..., description="错误描述")
    details: Optional[Dict] = Field(
        default=None, description="可选的详细错误信息"
    )
