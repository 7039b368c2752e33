"""
配置与 Schema 校验测试。
"""

import pytest
from pydantic import ValidationError

from oceangrid.core.config import Settings
from oceangrid.schemas.base import CameraConfig, ProjectionConfig, SpectrumConfig
from oceangrid.utils.numerical import is_power_of_two, next_power_of_two


@pytest.mark.parametrize(
    "requested, expected",
    [(128, 128), (100, 128), (1, 1), (3, 4), (257, 256), (1000, 256)],
)
def test_fourier_size_corrected(requested, expected):
    """测试网格尺寸被修正为不大于 256 的 2 的幂。"""
    assert SpectrumConfig(fourier_size=requested).fourier_size == expected


def test_fourier_size_correction_logs_warning(caplog):
    """测试修正网格尺寸时记录警告而不是报错。"""
    with caplog.at_level("WARNING"):
        SpectrumConfig(fourier_size=100)

    assert "changing 100 to 128" in caplog.text


def test_spectrum_defaults():
    """测试默认参数。"""
    config = SpectrumConfig()

    assert config.wind_speed == 8.0
    assert config.wave_amp == 1.0
    assert config.omega == 0.84
    assert config.grid_sizes == (5488.0, 392.0, 28.0, 2.0)
    assert config.choppiness == (2.3, 2.1, 1.3, 0.9)
    assert config.fourier_size == 128
    assert config.seed == 0


def test_invalid_spectrum_config():
    """测试无效参数被拒绝。"""
    with pytest.raises(ValidationError):
        SpectrumConfig(grid_sizes=(5488.0, 0.0, 28.0, 2.0))
    with pytest.raises(ValidationError):
        SpectrumConfig(wind_speed=0.0)
    with pytest.raises(ValidationError):
        SpectrumConfig(fourier_size=0)
    with pytest.raises(ValidationError):
        SpectrumConfig(seed=-1)


def test_camera_config_validation():
    """测试相机参数校验。"""
    camera = CameraConfig(position=(0.0, 20.0, 0.0))
    assert camera.forward == (0.0, 0.0, -1.0)

    with pytest.raises(ValidationError):
        CameraConfig(position=(0.0, 20.0, 0.0), forward=(0.0, 0.0, 0.0))
    with pytest.raises(ValidationError):
        CameraConfig(position=(0.0, 20.0, 0.0), near=10.0, far=5.0)


def test_projection_config_rejects_negative_height():
    """测试最大波高不能为负。"""
    with pytest.raises(ValidationError):
        ProjectionConfig(max_height=-1.0)


def test_settings_from_environment(monkeypatch):
    """测试环境变量覆盖配置。"""
    monkeypatch.setenv("OCEANGRID_MAX_HEIGHT", "4.5")
    monkeypatch.setenv("OCEANGRID_MAX_SIMULATIONS", "3")

    settings = Settings()
    assert settings.max_height == 4.5
    assert settings.max_simulations == 3
    assert settings.ocean_level == 0.0


def test_power_of_two_helpers():
    """测试 2 的幂工具函数。"""
    assert is_power_of_two(64)
    assert not is_power_of_two(96)
    assert not is_power_of_two(0)
    assert next_power_of_two(96) == 128
    assert next_power_of_two(1) == 1
