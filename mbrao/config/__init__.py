from .loader import load_config
from .models import (
    MbraoConfig,
    ParseOptions,
    RenderingConfig,
    RenderOptions,
)

__all__ = [
    "MbraoConfig",
    "ParseOptions",
    "RenderOptions",
    "RenderingConfig",
    "load_config",
]
