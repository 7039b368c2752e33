"""
基础配置 Schema 定义。

包含波浪谱、相机、投影等配置模型。
"""

import logging
from typing import Tuple

from pydantic import BaseModel, Field, field_validator

from oceangrid.core.config import settings
from oceangrid.utils.numerical import is_power_of_two, next_power_of_two

logger = logging.getLogger(__name__)

# 变换引擎的蝶形查找表为 8 位精度，网格尺寸上限 256
MAX_FOURIER_SIZE = 256


class SpectrumConfig(BaseModel):
    """波浪谱模型参数（Elfouhaily 统一方向谱）。"""

    wind_speed: float = Field(
        default=8.0, gt=0, description="10 米高度风速（m/s），越大涌浪越大"
    )
    wave_amp: float = Field(
        default=1.0, ge=0, description="波高缩放系数"
    )
    omega: float = Field(
        default=0.84,
        gt=0,
        description="逆波龄，越小海况越充分发展、波浪越大",
    )
    grid_sizes: Tuple[float, float, float, float] = Field(
        default=(5488.0, 392.0, 28.0, 2.0),
        description="四层网格的长度尺度（米），从大到小",
    )
    choppiness: Tuple[float, float, float, float] = Field(
        default=(2.3, 2.1, 1.3, 0.9),
        description="每层的水平位移强度",
    )
    fourier_size: int = Field(
        default=settings.default_fourier_size,
        ge=1,
        description="傅里叶网格尺寸 N，必须为 2 的幂且不大于 256",
    )
    seed: int = Field(
        default=settings.default_seed,
        ge=0,
        description="随机相位种子，0 生成标准谱",
    )

    @field_validator("grid_sizes")
    @classmethod
    def validate_grid_sizes(cls, v):
        """验证网格尺寸均为正数。"""
        if any(size <= 0 for size in v):
            raise ValueError("grid_sizes must all be greater than 0")
        return v

    @field_validator("fourier_size")
    @classmethod
    def correct_fourier_size(cls, v):
        """将网格尺寸修正为不大于 256 的 2 的幂（不报错，仅记录警告）。"""
        if v > MAX_FOURIER_SIZE:
            logger.warning(
                f"Fourier grid size must not be greater than {MAX_FOURIER_SIZE}, "
                f"changing {v} to {MAX_FOURIER_SIZE}"
            )
            v = MAX_FOURIER_SIZE
        if not is_power_of_two(v):
            corrected = next_power_of_two(v)
            logger.warning(
                f"Fourier grid size must be pow2 number, changing {v} to {corrected}"
            )
            v = corrected
        return v


class CameraConfig(BaseModel):
    """相机位姿与透视参数。"""

    position: Tuple[float, float, float] = Field(
        ..., description="相机世界坐标"
    )
    forward: Tuple[float, float, float] = Field(
        default=(0.0, 0.0, -1.0), description="相机前向（世界坐标）"
    )
    up: Tuple[float, float, float] = Field(
        default=(0.0, 1.0, 0.0), description="相机上方向"
    )
    fov_deg: float = Field(
        default=60.0, gt=0, lt=180, description="垂直视场角（度）"
    )
    aspect: float = Field(default=16.0 / 9.0, gt=0, description="宽高比")
    near: float = Field(default=0.3, gt=0, description="近裁剪面")
    far: float = Field(default=1000.0, gt=0, description="远裁剪面")

    @field_validator("forward")
    @classmethod
    def validate_forward(cls, v):
        """验证前向向量非零。"""
        if all(abs(c) < 1e-12 for c in v):
            raise ValueError("forward must not be a zero vector")
        return v

    @field_validator("far")
    @classmethod
    def validate_far(cls, v, info):
        """验证远裁剪面大于近裁剪面。"""
        near = info.data.get("near")
        if near is not None and v <= near:
            raise ValueError("far must be greater than near")
        return v


class ProjectionConfig(BaseModel):
    """投影网格参数。"""

    ocean_level: float = Field(
        default=settings.ocean_level, description="海平面世界高度（米）"
    )
    max_height: float = Field(
        default=settings.max_height,
        ge=0,
        description="波浪偏离海平面的最大高度（米），用于范围修正",
    )
