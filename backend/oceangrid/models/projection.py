"""
投影模型定义。
"""

from dataclasses import dataclass, field

import numpy as np

from oceangrid.schemas.base import CameraConfig
from oceangrid.utils.matrix import look_at, perspective


@dataclass
class Camera:
    """相机位姿与透视参数（OpenGL 约定）。"""

    position: np.ndarray  # 世界坐标
    forward: np.ndarray  # 前向
    up: np.ndarray = field(default_factory=lambda: np.array([0.0, 1.0, 0.0]))
    fov_deg: float = 60.0
    aspect: float = 16.0 / 9.0
    near: float = 0.3
    far: float = 1000.0

    def __post_init__(self):
        self.position = np.asarray(self.position, dtype=np.float64)
        self.forward = np.asarray(self.forward, dtype=np.float64)
        self.up = np.asarray(self.up, dtype=np.float64)

    @classmethod
    def from_config(cls, config: CameraConfig) -> "Camera":
        return cls(
            position=np.array(config.position),
            forward=np.array(config.forward),
            up=np.array(config.up),
            fov_deg=config.fov_deg,
            aspect=config.aspect,
            near=config.near,
            far=config.far,
        )

    def view_matrix(self) -> np.ndarray:
        """世界 -> 相机视空间矩阵。"""
        return look_at(self.position, self.position + self.forward, self.up)

    def projection_matrix(self) -> np.ndarray:
        """透视投影矩阵。"""
        return perspective(self.fov_deg, self.aspect, self.near, self.far)


@dataclass(frozen=True)
class ProjectionState:
    """单帧投影求解结果，每帧整体重建。"""

    ocean_level: float  # 投影平面高度
    max_height: float  # 最大波高
    is_flipped: bool  # 相机是否在海平面以下
    projector_vp: np.ndarray  # 4x4，R⁻¹ × P × V
    interpolation: np.ndarray  # 4x4，每行为单位四边形一个角点的齐次世界坐标
    projector_view: np.ndarray  # 重新瞄准后的视图矩阵
    projector_proj: np.ndarray  # 投影矩阵（复制自相机）
    range_matrix: np.ndarray  # 范围修正矩阵 R
    projector_position: np.ndarray  # 重新瞄准后的投影器位置
    visible: bool  # 是否有视锥点落入波高带
