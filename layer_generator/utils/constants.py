"""应用常量定义."""

import os
from pathlib import Path

# ===================
# 应用信息
# ===================
APP_VERSION = "0.1.0"

# ===================
# 路径常量
# ===================
# 应用数据目录，可通过环境变量覆盖
APP_DATA_DIR = Path(
    os.environ.get("LAYER_GENERATOR_HOME", Path.home() / ".layer-generator")
)

# 日志目录
LOG_DIR = APP_DATA_DIR / "logs"

# ===================
# 生成默认值
# ===================
DEFAULT_MAX_TO_GENERATE = 10
DEFAULT_IMAGE_WIDTH = 512
DEFAULT_IMAGE_HEIGHT = 512
DEFAULT_RANDOM_MODE = True
DEFAULT_USE_ORIGINAL_SIZE = True

# ===================
# 图片处理常量
# ===================
# 默认输出格式
DEFAULT_OUTPUT_FORMAT = "PNG"

# 支持的输出格式
SUPPORTED_OUTPUT_FORMATS = {"PNG", "JPEG", "WEBP"}

# 默认输出质量 (1-100)，仅对 JPEG/WEBP 生效
DEFAULT_OUTPUT_QUALITY = 95

# 支持的图片格式
SUPPORTED_IMAGE_FORMATS = {".jpg", ".jpeg", ".png", ".webp", ".bmp", ".gif"}

# 透明画布底色
TRANSPARENT = (0, 0, 0, 0)

# JPEG 输出时的铺底颜色
DEFAULT_FLATTEN_COLOR = (255, 255, 255)
