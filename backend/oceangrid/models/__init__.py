"""
内部数据模型模块。

包含谱网格、色散表、相机、投影状态、双缓冲、边界结果等内部数据结构。
"""

from oceangrid.models.buffers import PingPongBuffer
from oceangrid.models.projection import Camera, ProjectionState
from oceangrid.models.result import BoundaryErrorKind, BoundaryResult
from oceangrid.models.spectrum import DispersionGrid, SpectralGrid

__all__ = [
    "SpectralGrid",
    "DispersionGrid",
    "Camera",
    "ProjectionState",
    "PingPongBuffer",
    "BoundaryErrorKind",
    "BoundaryResult",
]
