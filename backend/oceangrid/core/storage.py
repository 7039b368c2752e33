"""
模拟实例存储模块。

使用内存存储海面模拟实例。
"""

from typing import Dict, Optional

from oceangrid.models.simulation import SimulationRecord


class SimulationStorage:
    """模拟实例存储（内存）。"""

    def __init__(self):
        self._records: Dict[str, SimulationRecord] = {}

    def add(self, record: SimulationRecord) -> None:
        """添加实例。"""
        self._records[record.simulation_id] = record

    def get(self, simulation_id: str) -> Optional[SimulationRecord]:
        """获取实例。"""
        return self._records.get(simulation_id)

    def update(self, record: SimulationRecord) -> None:
        """更新实例。"""
        if record.simulation_id in self._records:
            self._records[record.simulation_id] = record

    def remove(self, simulation_id: str) -> bool:
        """删除实例，返回是否存在。"""
        return self._records.pop(simulation_id, None) is not None

    def clear(self) -> None:
        """清空所有实例。"""
        self._records.clear()

    def __len__(self) -> int:
        return len(self._records)


# 全局存储实例
simulation_storage = SimulationStorage()
