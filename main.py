# 文件：main.py
# ---------------------
# 主程序入口：加载 config.yaml，执行 RAW 去噪流程
# 用法：python main.py [config.yaml]
import sys

from pipeline import RawDenoisePipeline


if __name__ == "__main__":
    print("main 启动中...")

    config_file = sys.argv[1] if len(sys.argv) > 1 else "config.yaml"
    isp = RawDenoisePipeline(config_file)
    isp.run()
