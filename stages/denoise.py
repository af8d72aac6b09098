# stages/denoise.py
# ---------------------
# RAW 去噪模块（小波分解 + 分频带软阈值）
# ✅ 放在 ISP 流程最前面（demosaic 之前），直接处理线性 RAW 马赛克。

import numpy as np

from dwt.cfa import CFAPattern
from dwt.driver import denoise
from dwt.params import load_params, resolve_band_multipliers


def cfa_from_config(config):
    """按优先级读取 CFA: cfa_table（通常由 rawpy 给出）> xtrans_pattern > bayer_pattern"""
    if config.get("cfa_table") is not None:
        return CFAPattern(config["cfa_table"])

    xtrans = config.get("xtrans_pattern")
    if xtrans:
        # 写 true 使用标准富士排列，也可以直接写 6x6 表
        return CFAPattern.xtrans(None if xtrans is True else xtrans)

    return CFAPattern.bayer(config.get("bayer_pattern", "rggb"))


def apply(raw, config):
    print(f"RawDenoise: 输入范围 [{raw.min():.1f}, {raw.max():.1f}]")

    params = load_params(config)
    cfa = cfa_from_config(config)
    force = resolve_band_multipliers(params)
    workers = config.get("workers", 1)

    print(f"RawDenoise: CFA={cfa}, 频带系数(all)={np.round(force[0], 3).tolist()}")

    denoised = denoise(raw, cfa, params["threshold"], force, workers=workers)

    print(f"RawDenoise: 输出范围 [{denoised.min():.1f}, {denoised.max():.1f}]")
    return denoised.astype(np.float32)
