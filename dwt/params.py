# dwt/params.py
# ---------------------
# 参数记录的版本管理（配置加载阶段完成，核心算法只看到当前版本）
# v1: 只有 threshold
# v2: threshold + 每组 (all/red/green/blue) 5 个曲线控制点 x/y

import numpy as np

from dwt.bands import band_multipliers
from dwt.noise_profile import BANDS, GROUP_NAMES

PARAMS_VERSION = 2
DEFAULT_THRESHOLD = 0.01
NEUTRAL_Y = 0.5


def default_knots():
    return {
        "x": [k / (BANDS - 1.0) for k in range(BANDS)],
        "y": [NEUTRAL_Y] * BANDS,
    }


def migrate_params(record, version):
    """把旧版本记录升级成 v2；未知版本直接报错"""
    if version == PARAMS_VERSION:
        return dict(record)
    if version == 1:
        # v1 的开头和 v2 一样，新增的曲线按默认值补齐
        upgraded = {"threshold": record.get("threshold", DEFAULT_THRESHOLD)}
        upgraded["bands"] = {name: default_knots() for name in GROUP_NAMES}
        print(f"RawDenoise: 参数 v1 → v{PARAMS_VERSION}，频带曲线使用默认值")
        return upgraded
    raise ValueError(f"不支持的 rawdenoise 参数版本: {version}")


def load_params(config):
    """从配置段读出当前版本参数

    返回 {'version', 'threshold', 'x': (4,5), 'y': (4,5)}
    """
    version = config.get("version", PARAMS_VERSION)
    record = migrate_params(config, version)

    bands = record.get("bands") or {}
    unknown = set(bands) - set(GROUP_NAMES)
    if unknown:
        raise ValueError(f"未知的频带分组: {sorted(unknown)}，可选: {list(GROUP_NAMES)}")

    xs, ys = [], []
    for name in GROUP_NAMES:
        knots = default_knots()
        knots.update(bands.get(name) or {})
        xs.append(knots["x"])
        ys.append(knots["y"])

    return {
        "version": PARAMS_VERSION,
        "threshold": float(record.get("threshold", DEFAULT_THRESHOLD)),
        "x": np.asarray(xs, dtype=np.float32),
        "y": np.asarray(ys, dtype=np.float32),
    }


def resolve_band_multipliers(params):
    """4 组曲线各采样一次，得到 4x5 频带系数表"""
    return np.stack([band_multipliers(params["x"][g], params["y"][g])
                     for g in range(len(GROUP_NAMES))])
