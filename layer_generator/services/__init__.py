"""服务层模块.

生成服务依赖核心模块，请从 ``layer_generator.services.generator_service`` 导入。
"""

from layer_generator.services.pillow_backend import PillowRasterBackend
from layer_generator.services.raster_backend import BaseRasterBackend

__all__ = [
    "BaseRasterBackend",
    "PillowRasterBackend",
]
