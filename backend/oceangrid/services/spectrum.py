"""
波浪谱模型服务。

Elfouhaily 统一方向谱：
"A unified directional spectrum for long and short wind-driven waves",
T. Elfouhaily, B. Chapron, K. Katsaros, D. Vandemark,
Journal of Geophysical Research vol 102, p781-796, 1997。

公式编号（Eq）均指该论文。
"""

import math

import numpy as np

from oceangrid.schemas.base import SpectrumConfig

# 重力加速度（m/s²）
G = 9.81

# Eq 59
WAVE_CM = 0.23
WAVE_KM = 370.0


def dispersion(k):
    """
    色散关系 ω(k) = sqrt(g·k·(1 + (k/km)²))（Eq 24）。

    Args:
        k: 波数（1/m），标量或数组

    Returns:
        角频率（rad/s）
    """
    return np.sqrt(G * k * (1.0 + np.square(k / WAVE_KM)))


class SpectrumModel:
    """
    方向谱密度 S(kx, ky)。

    只依赖配置中的风速、波高缩放和逆波龄，无内部状态。
    与波数无关的量（谱峰、摩擦速度、高频幅度）在构造时算好。
    """

    def __init__(self, config: SpectrumConfig):
        self.config = config

        u10 = config.wind_speed
        omega = config.omega

        # 谱峰（Eq 3 之后）
        self.kp = G * (omega / u10) ** 2
        self.cp = float(dispersion(self.kp)) / self.kp

        # 摩擦速度
        z0 = 3.7e-5 * u10 ** 2 / G * (u10 / self.cp) ** 0.9  # Eq 66
        self.u_star = 0.41 * u10 / math.log(10.0 / z0)  # Eq 60

        # 峰值增强参数（Eq 3 之后）
        self.gamma = 1.7 if omega < 1.0 else 1.7 + 6.0 * math.log(omega)
        self.sigma = 0.08 * (1.0 + 4.0 / omega ** 3)
        self.alpha_p = 0.006 * math.sqrt(omega)  # Eq 34

        # Eq 44
        if self.u_star < WAVE_CM:
            self.alpha_m = 0.01 * (1.0 + math.log(self.u_star / WAVE_CM))
        else:
            self.alpha_m = 0.01 * (1.0 + 3.0 * math.log(self.u_star / WAVE_CM))

        # 方向扩展（Eq 59）
        self.a0 = math.log(2.0) / 4.0
        self.ap = 4.0
        self.am = 0.13 * self.u_star / WAVE_CM

    def density(self, kx, ky, omnidirectional: bool = False):
        """
        计算谱密度。

        全向模式返回 wave_amp·(Bl+Bh)/k³，仅用于斜率方差积分。
        方向模式下 kx < 0 的半平面为 0（逆变换时由 Hermitian 对称补回）。
        k = 0 处定义为 0。

        Args:
            kx: x 方向波数，标量或数组
            ky: y 方向波数，标量或数组
            omnidirectional: 是否返回全向谱

        Returns:
            谱密度；输入为标量时返回 float
        """
        scalar = np.ndim(kx) == 0 and np.ndim(ky) == 0
        kx = np.asarray(kx, dtype=np.float64)
        ky = np.asarray(ky, dtype=np.float64)

        k = np.hypot(kx, ky)
        valid = k > 0.0
        # 零波数处先代入 1，最后再清零，避免除零
        k_safe = np.where(valid, k, 1.0)

        result = self._density(kx, ky, k_safe, omnidirectional)
        result = np.where(valid, result, 0.0)

        if scalar:
            return float(result)
        return result

    def _density(self, kx, ky, k, omnidirectional):
        omega = self.config.omega
        wave_amp = self.config.wave_amp
        kp, cp = self.kp, self.cp

        c = dispersion(k) / k  # 相速度

        # 低频（重力波）部分
        lpm = np.exp(-5.0 / 4.0 * np.square(kp / k))
        big_gamma = np.exp(
            -1.0 / (2.0 * self.sigma ** 2) * np.square(np.sqrt(k / kp) - 1.0)
        )
        jp = np.power(self.gamma, big_gamma)  # Eq 3
        fp = lpm * jp * np.exp(
            -omega / math.sqrt(10.0) * (np.sqrt(k / kp) - 1.0)
        )  # Eq 32
        bl = 0.5 * self.alpha_p * cp / c * fp  # Eq 31

        # 高频（毛细波）部分
        fm = np.exp(-0.25 * np.square(k / WAVE_KM - 1.0))  # Eq 41
        bh = 0.5 * self.alpha_m * WAVE_CM / c * fm * lpm  # Eq 40

        if omnidirectional:
            return wave_amp * (bl + bh) / (k * np.square(k))  # Eq 30

        delta = np.tanh(
            self.a0
            + self.ap * np.power(c / cp, 2.5)
            + self.am * np.power(WAVE_CM / c, 2.5)
        )  # Eq 57
        phi = np.arctan2(ky, kx)

        bl = bl * 2.0
        bh = bh * 2.0

        # 去掉与风向垂直的波
        tweak = np.sqrt(np.maximum(kx / k, 0.0))

        s = (
            wave_amp
            * (bl + bh)
            * (1.0 + delta * np.cos(2.0 * phi))
            / (2.0 * math.pi * np.square(np.square(k)))
            * tweak
        )
        return np.where(kx < 0.0, 0.0, s)
