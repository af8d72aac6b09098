
# pipeline.py
# ---------------------
# RAW 去噪流程控制器（Pipeline）
# ✅ 批量读取 input_dir 下的 RAW，逐个去噪，写回 .raw 并保存调试预览图

import yaml
import os
import numpy as np
import glob

from raw_loader.raw_reader import load_mosaic, CAMERA_RAW_EXTENSIONS
from stages import denoise
from utils.image_io import save_mosaic_preview, save_noise_map, write_raw


def log_data_range(raw, step_name):
    """监控数据范围，帮助调试"""
    print(f"→ {step_name}: 范围[{raw.min():.3f}, {raw.max():.3f}], "
          f"均值{raw.mean():.3f}, "
          f"99%分位数{np.percentile(raw, 99):.3f}")


class RawDenoisePipeline:
    def __init__(self, config_file):
        with open(config_file, encoding="utf-8") as f:
            self.config = yaml.safe_load(f)

    def find_inputs(self, input_dir):
        extensions = self.config['raw'].get('extensions', ['.raw'])
        files = []
        for ext in extensions:
            files.extend(glob.glob(os.path.join(input_dir, f"*{ext}")))
        return sorted(set(files))

    def run(self):
        cfg = self.config

        input_dir = cfg['raw'].get('input_dir')
        output_dir = cfg['output'].get('output_dir', 'output/results/')
        debug_base_dir = cfg['output'].get('debug_dir', 'output/debug_steps/')
        save_debug = cfg['output'].get('save_debug', True)
        denoise_cfg = cfg.get('rawdenoise', {})

        if not input_dir:
            raise ValueError("config.yaml 中 'raw' 部分必须指定 'input_dir' 用于批量处理。")

        os.makedirs(output_dir, exist_ok=True)

        raw_files = self.find_inputs(input_dir)
        if not raw_files:
            print(f"警告: 在目录 '{input_dir}' 中未找到任何 RAW 文件。请检查路径和文件后缀。")
            return []

        print(f"在 '{input_dir}' 中找到 {len(raw_files)} 个 RAW 文件进行处理。")

        outputs = []
        for raw_file_path in raw_files:
            file_name_with_ext = os.path.basename(raw_file_path)
            file_name_without_ext, ext = os.path.splitext(file_name_with_ext)

            print(f"\n--- 开始处理文件: {file_name_with_ext} ---")

            # 复制一份，避免修改全局配置
            current_raw_cfg = cfg['raw'].copy()
            current_raw_cfg['path'] = raw_file_path
            raw, cfa = load_mosaic(current_raw_cfg)
            log_data_range(raw, "RAW 输入")

            if denoise_cfg.get('enable', True):
                stage_cfg = dict(denoise_cfg)
                if cfa is not None:
                    # 相机 RAW 自带的 CFA 排列优先于配置
                    stage_cfg['cfa_table'] = cfa.table.tolist()
                denoised = denoise.apply(raw, stage_cfg)
                log_data_range(denoised, "RAW 去噪")
            else:
                print("RawDenoise 未启用，原样输出")
                denoised = raw

            if save_debug:
                current_debug_dir = os.path.join(debug_base_dir, file_name_without_ext)
                ref_max = float(raw.max())
                save_mosaic_preview(raw, os.path.join(current_debug_dir, 'step0_raw.png'), reference_max=ref_max)
                save_mosaic_preview(denoised, os.path.join(current_debug_dir, 'step1_rawdenoise.png'),
                                    reference_max=ref_max)
                save_noise_map(raw, denoised, os.path.join(current_debug_dir, 'step1_removed_noise.png'))

            # 相机 RAW 统一按 16bit 写出
            if ext.lower() in CAMERA_RAW_EXTENSIONS:
                bit_depth = 16
            else:
                bit_depth = cfg['raw'].get('sensor_bit_depth', 10)
            output_path = os.path.join(output_dir, f"{file_name_without_ext}_denoised.raw")
            write_raw(denoised, output_path, bit_depth)
            outputs.append(output_path)
            print(f"✅ 文件 '{file_name_with_ext}' 处理完成，输出已保存至：{output_path}")

        print("\n--- 所有文件处理完毕 ---")
        return outputs
