"""
波浪谱模型测试。
"""

import math

import numpy as np
import pytest

from oceangrid.schemas.base import SpectrumConfig
from oceangrid.services.spectrum import WAVE_KM, G, SpectrumModel, dispersion


def test_dispersion_relation():
    """测试色散关系。"""
    assert dispersion(0.0) == 0.0

    k = 0.5
    expected = math.sqrt(G * k * (1.0 + (k / WAVE_KM) ** 2))
    assert dispersion(k) == pytest.approx(expected)

    ks = np.linspace(0.0, 500.0, 200)
    assert np.all(np.diff(dispersion(ks)) >= 0.0)


def test_density_scalar_returns_float():
    """测试标量输入返回 float。"""
    model = SpectrumModel(SpectrumConfig())
    value = model.density(0.05, 0.01)

    assert isinstance(value, float)
    assert value > 0.0


def test_density_zero_wavenumber():
    """测试 k = 0 时密度为 0 而不是 NaN/Inf。"""
    model = SpectrumModel(SpectrumConfig())

    assert model.density(0.0, 0.0) == 0.0
    assert model.density(0.0, 0.0, omnidirectional=True) == 0.0


def test_density_upwind_half_plane_suppressed():
    """测试 kx < 0 的半平面密度为 0。"""
    model = SpectrumModel(SpectrumConfig())

    k = np.linspace(-2.0, 2.0, 41)
    kx, ky = np.meshgrid(k, k)
    s = model.density(kx, ky)

    assert np.all(s[kx < 0.0] == 0.0)
    assert np.all(s[kx > 0.0] >= 0.0)
    assert np.all(np.isfinite(s))


def test_density_perpendicular_to_wind_is_zero():
    """测试与风向垂直（kx = 0）的波被修正因子去掉。"""
    model = SpectrumModel(SpectrumConfig())

    assert model.density(0.0, 0.3) == 0.0


def test_omnidirectional_spectrum_positive():
    """测试全向谱为正且有限。"""
    model = SpectrumModel(SpectrumConfig())
    k = np.geomspace(5e-3, 1e3, 50)
    s = model.density(k, np.zeros_like(k), omnidirectional=True)

    assert np.all(np.isfinite(s))
    assert np.all(s >= 0.0)
    assert np.max(s) > 0.0


def test_density_scales_with_wave_amp():
    """测试密度与波高缩放系数成正比。"""
    base = SpectrumModel(SpectrumConfig(wave_amp=1.0))
    doubled = SpectrumModel(SpectrumConfig(wave_amp=2.0))
    silent = SpectrumModel(SpectrumConfig(wave_amp=0.0))

    kx, ky = 0.08, 0.02
    assert doubled.density(kx, ky) == pytest.approx(2.0 * base.density(kx, ky))
    assert silent.density(kx, ky) == 0.0


def test_density_deterministic():
    """测试同一配置下密度确定。"""
    config = SpectrumConfig(wind_speed=12.0, omega=1.5)
    a = SpectrumModel(config).density(0.1, 0.05)
    b = SpectrumModel(config).density(0.1, 0.05)

    assert a == b


def test_peak_enhancement_for_young_sea():
    """测试 omega >= 1 时使用对数峰值增强。"""
    model = SpectrumModel(SpectrumConfig(omega=2.0))

    assert model.gamma == pytest.approx(1.7 + 6.0 * math.log(2.0))
    assert SpectrumModel(SpectrumConfig(omega=0.84)).gamma == 1.7
