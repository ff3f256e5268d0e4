import math

from coloring.application.actions import color_action
from coloring.domain.entities.stroke import BRUSH, TOOLS

MIN_BRUSH = 5
MAX_BRUSH = 50
DEFAULT_BRUSH = 10


def clamp_size(size):
    size = float(size)
    if not math.isfinite(size):
        raise ValueError(f"Tamaño no válido: {size!r}")
    return max(MIN_BRUSH, min(MAX_BRUSH, int(size)))


class ToolState:
    """
    Herramienta, color y tamaño elegidos en la interfaz.
    El editor solo los lee al empezar cada trazo o relleno.
    """

    def __init__(self, tool=BRUSH, color=color_action.DEFAULT_COLOR, size=DEFAULT_BRUSH):
        self.tool = BRUSH
        self.color = color_action.parse_color(color_action.DEFAULT_COLOR)
        self.size = DEFAULT_BRUSH
        self.update(tool=tool, color=color, size=size)

    def update(self, tool=None, color=None, size=None):
        # Se valida todo antes de cambiar nada
        if tool is not None and tool not in TOOLS:
            raise ValueError(f"Herramienta desconocida: {tool!r}")
        new_color = color_action.parse_color(color) if color is not None else self.color
        new_size = clamp_size(size) if size is not None else self.size
        if tool is not None:
            self.tool = tool
        self.color = new_color
        self.size = new_size
        return self

    def as_dict(self):
        return {
            "tool": self.tool,
            "color": color_action.to_hex(self.color),
            "size": self.size,
        }
