# dwt/driver.py
# ---------------------
# 去噪入口：按 CFA 几何选择 Bayer / X-Trans 分解
# ✅ 纯函数：不修改输入，没有跨调用的状态，结果与线程数无关

import concurrent.futures

import numpy as np

from dwt.bayer import wavelet_denoise
from dwt.noise_profile import BandNoiseProfile
from dwt.xtrans import wavelet_denoise_xtrans


def denoise(mosaic, cfa, threshold, band_multipliers, workers=1):
    """对 RAW 马赛克做小波去噪

    - mosaic: (H, W) 非负强度
    - cfa: CFAPattern
    - threshold: 全局噪声阈值 [0, 1]，<= 0 时原样拷贝输出
    - band_multipliers: 4x5 频带系数 (all, R, G, B)
    - workers: >1 时每个 pass 的行块交给线程池
    """
    mosaic = np.asarray(mosaic)
    if mosaic.ndim != 2 or mosaic.shape[0] <= 0 or mosaic.shape[1] <= 0:
        raise ValueError(f"RAW 马赛克必须是非空二维数组，当前形状 {mosaic.shape}")

    profile = BandNoiseProfile(threshold, band_multipliers)
    if not threshold > 0:
        return mosaic.copy()

    height, width = mosaic.shape
    kind = "X-Trans" if cfa.is_xtrans else "Bayer"
    print(f"RawDenoise: {kind} {width}x{height}, 阈值 {float(threshold):.4f}, 线程 {workers}")

    raw = mosaic.astype(np.float32)
    method = wavelet_denoise_xtrans if cfa.is_xtrans else wavelet_denoise
    if workers and workers > 1:
        with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as pool:
            return method(raw, cfa, profile, pool)
    return method(raw, cfa, profile)
