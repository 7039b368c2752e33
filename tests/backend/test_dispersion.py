"""
色散表测试。
"""

import math

import numpy as np
import pytest

from oceangrid.services.dispersion import build_dispersion_table, inverse_grid_sizes
from oceangrid.services.spectrum import dispersion


def test_table_shape(small_config):
    """测试色散表形状。"""
    table = build_dispersion_table(small_config)

    assert table.omega.shape == (16, 16, 4)
    assert table.size == 16
    assert table.layer(2).shape == (16, 16)


def test_table_non_negative_and_dc_zero(small_config):
    """测试角频率非负，直流处为 0。"""
    table = build_dispersion_table(small_config)

    assert np.all(table.omega >= 0.0)
    assert np.all(table.omega[0, 0] == 0.0)


def test_table_monotonic_in_wavenumber(small_config):
    """测试固定层内角频率随 |k| 单调不减。"""
    table = build_dispersion_table(small_config)
    n = small_config.fourier_size

    uv = np.arange(n) / n
    st = np.where(uv >= 0.5, uv - 1.0, uv)
    sy, sx = np.meshgrid(st, st, indexing="ij")
    radius = np.hypot(sx, sy).ravel()
    order = np.argsort(radius, kind="stable")

    for layer in range(4):
        omega = table.layer(layer).ravel()[order]
        assert np.all(np.diff(omega) >= -1e-12)


def test_table_matches_dispersion_relation(small_config):
    """测试格点值与色散关系一致。"""
    table = build_dispersion_table(small_config)
    factors = inverse_grid_sizes(small_config)

    # x = 3, y = 14 -> st = (3/16, -2/16)
    k = math.hypot(3 / 16, -2 / 16) * factors[1]
    assert table.omega[14, 3, 1] == pytest.approx(float(dispersion(k)))

    # 与谱生成使用的波数一致
    assert factors[0] / small_config.fourier_size == pytest.approx(
        2.0 * math.pi / small_config.grid_sizes[0]
    )


def test_table_is_read_only(small_config):
    """测试色散表只读。"""
    table = build_dispersion_table(small_config)

    with pytest.raises(ValueError):
        table.omega[0, 0, 0] = 1.0


def test_table_depends_only_on_grid(small_config):
    """测试色散表与风速无关。"""
    windy = small_config.model_copy(update={"wind_speed": 20.0})

    assert np.array_equal(
        build_dispersion_table(small_config).omega,
        build_dispersion_table(windy).omega,
    )
