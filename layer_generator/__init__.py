"""分层图片组合生成器.

从各图层独立提供的候选图片中选择组合，并按图层顺序叠加合成最终图片。
"""

from layer_generator.utils.constants import APP_VERSION

__version__ = APP_VERSION
