BRUSH = "brush"
BUCKET = "bucket"
ERASER = "eraser"

TOOLS = (BRUSH, BUCKET, ERASER)


class Stroke:
    """Trazo en curso. Solo vive mientras se rasteriza; no se guarda al terminar."""

    def __init__(self, start, tool, color, size):
        self.points = [start]  # Lista de (x, y)
        self.tool = tool       # brush | eraser
        self.color = color     # (r, g, b, a)
        self.size = size

    @property
    def radius(self):
        return max(1, int(round(self.size / 2)))

    @property
    def last_point(self):
        return self.points[-1]

    def add_point(self, point):
        self.points.append(point)
