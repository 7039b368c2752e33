"""
双缓冲（ping-pong）存储。
"""

import numpy as np


class PingPongBuffer:
    """
    两槽交替存储。

    write() 写入 write_index 指向的槽后翻转索引；
    read() 总是读取 1 - write_index，即最后写入的槽。
    """

    def __init__(self, shape, dtype=np.float64):
        self._slots = [np.zeros(shape, dtype=dtype), np.zeros(shape, dtype=dtype)]
        self.write_index = 0
        self.writes = 0

    @property
    def read_index(self) -> int:
        return 1 - self.write_index

    @property
    def shape(self):
        return self._slots[0].shape

    def write(self, data: np.ndarray) -> int:
        """
        写入下一槽并翻转。

        Returns:
            本次写入的槽索引
        """
        if data.shape != self.shape:
            raise ValueError(
                f"Buffer shape mismatch: expected {self.shape}, got {data.shape}"
            )
        written = self.write_index
        np.copyto(self._slots[written], data)
        self.write_index = 1 - written
        self.writes += 1
        return written

    def read(self) -> np.ndarray:
        """读取最后写入的槽（只读视图）。"""
        view = self._slots[self.read_index].view()
        view.setflags(write=False)
        return view
