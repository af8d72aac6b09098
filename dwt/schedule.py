# dwt/schedule.py
# ---------------------
# 行调度：重排行的处理顺序，让相距 scale 的行连续处理
# ✅ 只影响缓存命中，不影响结果；任意并行度下输出逐位一致

import numpy as np

# 每个任务块处理的行数
BLOCK_ROWS = 64


def row_schedule(height, scale):
    """返回 rowid -> row 的排列

    scale=16 时顺序为 0, 16, 32, ..., 1, 17, 33, ..., 2, 18, ...
    height 不是 scale 的整数倍时，前 height % scale 趟多处理一行。
    """
    rowid = np.arange(height)
    if height <= scale:
        return rowid

    per_pass = (height + scale - 1) // scale
    long_passes = height % scale
    rows = rowid // per_pass + scale * (rowid % per_pass)
    if long_passes:
        split = long_passes * per_pass
        rest = rowid[split:] - split
        rows[split:] = long_passes + rest // (per_pass - 1) + scale * (rest % (per_pass - 1))
    return rows


def run_blocks(fn, count, pool=None, block=BLOCK_ROWS):
    """把 [0, count) 切成若干 slice 交给 fn；有线程池时并行执行"""
    slices = [slice(start, min(start + block, count)) for start in range(0, count, block)]
    if pool is None:
        for sl in slices:
            fn(sl)
        return
    # 消费结果，让任务里的异常抛回调用方
    for _ in pool.map(fn, slices):
        pass
