# dwt/bands.py
# ---------------------
# 频带曲线：5 个控制点 -> 5 个频带系数
# ✅ 只做数值计算，曲线编辑界面不在这里

import numpy as np
from scipy.interpolate import PchipInterpolator

from dwt.noise_profile import BANDS


def band_multipliers(x, y):
    """在 [0, 1] 上等间距采样控制点曲线，得到 BANDS 个频带系数

    曲线两端各补一个影子点 (x[3]-1, y[0]) 和 (x[1]+1, y[4])，
    用单调三次插值（PCHIP）连起来，避免过冲。
    """
    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)
    if x.shape != (BANDS,) or y.shape != (BANDS,):
        raise ValueError(f"频带曲线需要 {BANDS} 个控制点")
    if np.any(np.diff(x) <= 0) or x[0] < 0 or x[-1] > 1:
        raise ValueError(f"控制点 x 必须在 [0, 1] 内严格递增: {x.tolist()}")

    xs = np.concatenate(([x[BANDS - 2] - 1.0], x, [x[1] + 1.0]))
    ys = np.concatenate(([y[0]], y, [y[-1]]))
    curve = PchipInterpolator(xs, ys)
    values = curve(np.linspace(0.0, 1.0, BANDS))
    return np.clip(values, 0.0, 1.0).astype(np.float32)
