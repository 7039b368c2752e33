"""
Pytest 配置文件。

提供全局的测试配置和 fixture。
"""

import sys
from pathlib import Path

import pytest

# 获取项目根目录
project_root = Path(__file__).parent.parent

# 添加 backend 目录到 Python 路径（让测试可以导入 oceangrid 包）
backend_path = project_root / "backend"
if str(backend_path) not in sys.path:
    sys.path.insert(0, str(backend_path))


@pytest.fixture
def small_config():
    """小尺寸波浪谱配置，加快测试速度。"""
    from oceangrid.schemas.base import SpectrumConfig

    return SpectrumConfig(fourier_size=16, seed=0)


@pytest.fixture
def canonical_config():
    """标准配置：windSpeed=8, waveAmp=1, omega=0.84, N=128, seed=0。"""
    from oceangrid.schemas.base import SpectrumConfig

    return SpectrumConfig(
        wind_speed=8.0,
        wave_amp=1.0,
        omega=0.84,
        grid_sizes=(5488.0, 392.0, 28.0, 2.0),
        fourier_size=128,
        seed=0,
    )
