"""Graphics for BEAR RUN."""

from bearrun.graphics.primitives import Buffer, Color, new_buffer
from bearrun.graphics.scene import SceneRenderer

__all__ = ["Buffer", "Color", "SceneRenderer", "new_buffer"]
