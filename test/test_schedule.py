# 文件：test/test_schedule.py
import sys
import os
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import concurrent.futures

import numpy as np
import pytest

from dwt.schedule import row_schedule, run_blocks


@pytest.mark.parametrize("scale", [1, 2, 4, 8, 16, 32])
def test_schedule_is_permutation(scale):
    for height in range(1, 38):
        rows = row_schedule(height, min(scale, height))
        np.testing.assert_array_equal(np.sort(rows), np.arange(height))


def test_consecutive_rows_are_scale_apart():
    rows = row_schedule(16, 4)
    np.testing.assert_array_equal(rows, [0, 4, 8, 12, 1, 5, 9, 13, 2, 6, 10, 14, 3, 7, 11, 15])


def test_long_and_short_passes():
    # 5 行、scale=2：一趟 3 行 (0,2,4)，一趟 2 行 (1,3)
    np.testing.assert_array_equal(row_schedule(5, 2), [0, 2, 4, 1, 3])


def test_identity_when_scale_covers_height():
    np.testing.assert_array_equal(row_schedule(6, 8), np.arange(6))
    np.testing.assert_array_equal(row_schedule(6, 6), np.arange(6))


def test_run_blocks_covers_every_index():
    seen = np.zeros(300, dtype=np.int64)

    def mark(sl):
        seen[sl] += 1

    run_blocks(mark, 300, block=64)
    np.testing.assert_array_equal(seen, 1)

    with concurrent.futures.ThreadPoolExecutor(max_workers=3) as pool:
        run_blocks(mark, 300, pool, block=7)
    np.testing.assert_array_equal(seen, 2)


def test_run_blocks_propagates_errors():
    def boom(sl):
        raise RuntimeError("block failed")

    with concurrent.futures.ThreadPoolExecutor(max_workers=2) as pool:
        with pytest.raises(RuntimeError):
            run_blocks(boom, 10, pool)
