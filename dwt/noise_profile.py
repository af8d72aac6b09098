# dwt/noise_profile.py
# ---------------------
# 每个小波频带的噪声阈值
# ✅ 基础噪声常数描述的是图像细节统计，与 CFA 排列无关，Bayer / X-Trans 共用

import numpy as np

from dwt.cfa import RED, BLUE

BANDS = 5

# 用户侧的四组频带系数
GROUP_ALL, GROUP_R, GROUP_G, GROUP_B = 0, 1, 2, 3
GROUP_NAMES = ("all", "red", "green", "blue")

# 经验噪声功率，由细到粗
NOISE_BASE = np.array([0.8002, 0.2735, 0.1202, 0.0585, 0.0291, 0.0152, 0.0080, 0.0044],
                      dtype=np.float32)


def color_group(color):
    if color == RED:
        return GROUP_R
    if color == BLUE:
        return GROUP_B
    return GROUP_G


class BandNoiseProfile:
    """阈值标量 + 4x5 频带系数，构造后只读

    band_multipliers[group] 按粗尺度在前存储，计算时第 i 个（细尺度在前）
    频带取 band_multipliers[group][BANDS - 1 - i]。系数取 4 次方，
    0.5 的中性值正好对应 16*16 修正后的 1。
    """

    def __init__(self, threshold, band_multipliers):
        force = np.array(band_multipliers, dtype=np.float32)
        if force.shape != (len(GROUP_NAMES), BANDS):
            raise ValueError(f"频带系数必须是 {len(GROUP_NAMES)}x{BANDS}，当前为 {force.shape}")
        force.setflags(write=False)
        self.threshold = np.float32(threshold)
        self.band_multipliers = force

    def _exp4(self, group):
        f = self.band_multipliers[group, ::-1]
        f = f * f
        return f * f

    def bayer_thresholds(self, color):
        noise = NOISE_BASE[:BANDS] * self._exp4(GROUP_ALL) * self._exp4(color_group(color))
        noise = noise * np.float32(16.0) * np.float32(16.0)
        # 与上面分开相乘，合并会改变 float32 舍入
        return noise * self.threshold

    def xtrans_thresholds(self, color):
        # X-Trans 先把 all 组折进一张表，再单独乘通道项，常数也不同(16 而非 256)
        table = NOISE_BASE[:BANDS] * self._exp4(GROUP_ALL) * np.float32(16.0)
        noise = table * self._exp4(color_group(color)) * np.float32(16.0)
        return self.threshold * noise
