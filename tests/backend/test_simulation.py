"""
海面模拟与双缓冲测试。
"""

import numpy as np
import pytest

from oceangrid.core.simulation_manager import create_simulation, delete_simulation
from oceangrid.core.storage import simulation_storage
from oceangrid.models.buffers import PingPongBuffer
from oceangrid.models.result import BoundaryErrorKind
from oceangrid.services.evolver import NumpyTransformEngine
from oceangrid.services.generator import checksum
from oceangrid.services.simulation import OceanSimulation


class FailingEngine:
    """总是失败的变换引擎。"""

    def inverse_transform(self, grids):
        raise RuntimeError("device lost")


class CountingEngine(NumpyTransformEngine):
    """记录每次调用批量大小的引擎。"""

    def __init__(self, size):
        super().__init__(size)
        self.batches = []

    def inverse_transform(self, grids):
        self.batches.append(grids.shape[0])
        return super().inverse_transform(grids)


def test_ping_pong_alternates():
    """测试写入后翻转，读取最后写入的槽。"""
    buffers = PingPongBuffer((2, 2))
    assert buffers.write_index == 0
    assert buffers.read_index == 1

    assert buffers.write(np.full((2, 2), 1.0)) == 0
    assert buffers.read_index == 0
    assert np.all(buffers.read() == 1.0)

    assert buffers.write(np.full((2, 2), 2.0)) == 1
    assert buffers.read_index == 1
    assert np.all(buffers.read() == 2.0)

    assert buffers.write(np.full((2, 2), 3.0)) == 0
    assert buffers.writes == 3


def test_ping_pong_read_is_read_only():
    """测试读取得到只读视图，形状不符时拒绝写入。"""
    buffers = PingPongBuffer((2, 2))
    buffers.write(np.ones((2, 2)))

    with pytest.raises(ValueError):
        buffers.read()[0, 0] = 5.0
    with pytest.raises(ValueError):
        buffers.write(np.ones((3, 3)))


def test_frame_view_survives_one_more_write():
    """测试帧视图在下一次写入后仍有效（写入另一槽）。"""
    buffers = PingPongBuffer((1,))
    buffers.write(np.array([1.0]))
    frame = buffers.read()
    buffers.write(np.array([2.0]))

    assert frame[0] == 1.0


def test_step_produces_frame(small_config):
    """测试单步演化输出帧。"""
    simulation = OceanSimulation(small_config, engine=NumpyTransformEngine(16))
    result = simulation.step(1.5)

    assert result.ok
    frame = result.value
    assert frame.time == 1.5
    assert frame.maps.shape == (4, 5, 16, 16)
    assert frame.heights(2).shape == (16, 16)
    assert frame.choppiness == small_config.choppiness
    assert frame.grid_sizes == small_config.grid_sizes
    assert frame.variance_correction == simulation.variance_correction
    assert frame.buffer_index == 0
    assert simulation.time == 1.5


def test_step_alternates_buffers(small_config):
    """测试连续两帧写入不同的槽。"""
    simulation = OceanSimulation(small_config, engine=NumpyTransformEngine(16))

    first = simulation.step(0.0).value
    first_heights = first.heights(0).copy()
    second = simulation.step(3.0).value

    assert first.buffer_index == 0
    assert second.buffer_index == 1
    assert np.array_equal(first.heights(0), first_heights)
    assert np.array_equal(simulation.maps, second.maps)


def test_step_is_a_function_of_time(small_config):
    """测试输出只取决于时间，与调用历史无关。"""
    a = OceanSimulation(small_config, engine=NumpyTransformEngine(16))
    b = OceanSimulation(small_config, engine=NumpyTransformEngine(16))

    a.step(1.0)
    a.step(7.0)
    maps_a = a.step(2.5).value.maps.copy()
    maps_b = b.step(2.5).value.maps

    assert np.array_equal(maps_a, maps_b)


def test_step_one_engine_call_per_layer(small_config):
    """测试每层一次引擎调用，批量不超过 5。"""
    engine = CountingEngine(16)
    OceanSimulation(small_config, engine=engine).step(0.5)

    assert engine.batches == [5, 5, 5, 5]


def test_step_without_engine(small_config):
    """测试没有引擎时跳过本帧。"""
    simulation = OceanSimulation(small_config)
    result = simulation.step(1.0)

    assert not result.ok
    assert result.error == BoundaryErrorKind.MISSING_ENGINE
    assert simulation.buffers.writes == 0
    assert simulation.time == 0.0


def test_step_engine_failure(small_config):
    """测试引擎失败时报告错误，不写入缓冲。"""
    simulation = OceanSimulation(small_config, engine=FailingEngine())
    result = simulation.step(1.0)

    assert not result.ok
    assert result.error == BoundaryErrorKind.TRANSFORM_FAILED
    assert "device lost" in result.message
    assert simulation.buffers.writes == 0


def test_advance(small_config):
    """测试按 dt 推进时间。"""
    simulation = OceanSimulation(small_config, engine=NumpyTransformEngine(16))
    simulation.advance(0.25)
    result = simulation.advance(0.25)

    assert result.ok
    assert result.value.time == pytest.approx(0.5)


def test_reconfigure_rebuilds_everything(small_config):
    """测试重新配置时整体重建谱与色散表。"""
    simulation = OceanSimulation(small_config, engine=NumpyTransformEngine(16))
    before = checksum(simulation.spectrum)

    simulation.reconfigure(small_config.model_copy(update={"seed": 3}))
    assert checksum(simulation.spectrum) != before

    bigger = small_config.model_copy(update={"fourier_size": 32})
    simulation.engine = NumpyTransformEngine(32)
    simulation.reconfigure(bigger)

    assert simulation.spectrum.size == 32
    assert simulation.dispersion_grid.size == 32
    assert simulation.step(1.0).value.maps.shape == (4, 5, 32, 32)


def test_storage_add_get_remove(small_config):
    """测试内存存储的增删查。"""
    simulation_storage.clear()
    record = create_simulation(small_config)

    assert len(simulation_storage) == 1
    assert simulation_storage.get(record.simulation_id) is record
    assert not hasattr(simulation_storage, "list")

    assert delete_simulation(record.simulation_id) is True
    assert delete_simulation(record.simulation_id) is False
    assert simulation_storage.get(record.simulation_id) is None
    assert len(simulation_storage) == 0
