import math
import threading

from coloring.application.actions import color_action, fill_action, save_action
from coloring.application.actions.undo_action import History
from coloring.domain.entities.history_entry import HistoryEntry
from coloring.domain.entities.pixel_buffer import PixelBuffer
from coloring.domain.entities.stroke import BRUSH, BUCKET, ERASER, Stroke
from coloring.infrastructure.opencv.draw_utils import blank_canvas, segment_mask

COORD_LIMIT = 1_000_000_000


class CanvasEditor:
    """
    Lienzo del libro de colorear.

    Guarda dos capas del mismo tamaño: el fondo (el dibujo de líneas cargado,
    o blanco) y el buffer visible donde se pinta. El borrador devuelve los
    píxeles del fondo, así que nunca borra el contorno.

    Cada operación que modifica el buffer deja una entrada en el historial con
    la caja cambiada y sus píxeles previos. Las llamadas deben hacerse con
    `lock` tomado si el editor se comparte entre hilos.
    """

    def __init__(self, width=800, height=600, history_limit=30,
                 fill_tolerance=fill_action.DEFAULT_TOLERANCE):
        self.buffer = PixelBuffer(width, height)
        self.background = blank_canvas(height, width)
        self.history = History(history_limit)
        self.fill_tolerance = fill_tolerance
        self.lock = threading.RLock()

        self.stroke = None
        self._stroke_before = None

    @property
    def width(self):
        return self.buffer.width

    @property
    def height(self):
        return self.buffer.height

    # ===============================
    # 🔹 FONDO
    # ===============================

    def load_background(self, source):
        """
        Sustituye el contenido por la imagen (bytes, data URI o ruta) ajustada
        al lienzo y vacía el historial. Si la imagen no se puede leer se lanza
        BackgroundLoadError y el lienzo queda intacto.
        """
        pixels = save_action.load_background_image(source, self.width, self.height)

        self.stroke = None
        self._stroke_before = None
        self.background = pixels
        self.buffer.replace(pixels)
        self.history.clear()
        print(f"[INFO] Fondo cargado en lienzo de {self.width}x{self.height}.")

    # ===============================
    # 🔹 TRAZOS
    # ===============================

    def begin_stroke(self, point, tool, color, size):
        if tool == BUCKET:
            return self.fill_at(point, color)
        if tool not in (BRUSH, ERASER):
            raise ValueError(f"Herramienta desconocida: {tool!r}")

        stroke = Stroke(_as_point(point), tool, color_action.parse_color(color), size)
        if self.stroke is not None:
            self.end_stroke()
        self._stroke_before = self.buffer.copy_pixels()
        self.stroke = stroke
        self._paint_segment(self.stroke.last_point, self.stroke.last_point)
        return True

    def continue_stroke(self, point):
        """Añade un punto al trazo en curso; False si no hay trazo."""
        if self.stroke is None:
            return False
        point = _as_point(point)
        previous = self.stroke.last_point
        self.stroke.add_point(point)
        self._paint_segment(previous, point)
        return True

    def end_stroke(self):
        if self.stroke is None:
            return False

        entry = HistoryEntry.from_diff("stroke", self._stroke_before, self.buffer.pixels)
        self.history.push(entry)
        print(f"[TRACE] Trazo {self.stroke.tool} de {len(self.stroke.points)} puntos; "
              f"historial: {len(self.history)}.")

        self.stroke = None
        self._stroke_before = None
        return True

    def _paint_segment(self, p1, p2):
        mask = segment_mask(self.height, self.width, p1, p2, self.stroke.radius) > 0
        pixels = self.buffer.pixels
        if self.stroke.tool == ERASER:
            pixels[mask] = self.background[mask]
        else:
            pixels[mask] = self.stroke.color

    # ===============================
    # 🔹 RELLENO, LIMPIAR Y DESHACER
    # ===============================

    def fill_at(self, point, color, tolerance=None):
        """Bote de pintura en `point`. Devuelve True si cambió algún píxel."""
        seed = _as_point(point)
        fill_color = color_action.parse_color(color)
        if self.stroke is not None:
            self.end_stroke()

        tolerance = self.fill_tolerance if tolerance is None else tolerance
        before = self.buffer.copy_pixels()
        box = fill_action.flood_fill(self.buffer.pixels, seed, fill_color, tolerance)

        if box is None:
            self.history.push(HistoryEntry("fill"))
            print("[FILL] Sin cambios (mismo color o fuera del lienzo).")
            return False

        x0, y0, x1, y1 = box
        self.history.push(HistoryEntry("fill", x0, y0, before[y0:y1, x0:x1].copy()))
        print(f"[FILL] Región ({x0},{y0})-({x1},{y1}) rellenada.")
        return True

    def clear(self):
        """Vuelve al fondo cargado. Se puede deshacer."""
        if self.stroke is not None:
            self.end_stroke()
        before = self.buffer.copy_pixels()
        self.buffer.replace(self.background)
        self.history.push(HistoryEntry.from_diff("clear", before, self.buffer.pixels))

    def undo(self):
        """Deshace la última acción. False si el historial está vacío."""
        if self.stroke is not None:
            self.end_stroke()

        entry = self.history.pop()
        if entry is None:
            return False
        entry.restore(self.buffer.pixels)
        print(f"[UNDO] Deshecho {entry.label}, quedan {len(self.history)} en el historial.")
        return True

    # ===============================
    # 🔹 EXPORTACIÓN
    # ===============================

    def save(self):
        """PNG del lienzo actual. No modifica nada."""
        return save_action.encode_png(self.buffer.pixels)

    def snapshot(self):
        return self.buffer.copy_pixels()


def _as_point(point):
    x, y = float(point[0]), float(point[1])
    if not (math.isfinite(x) and math.isfinite(y)):
        raise ValueError(f"Punto no válido: {point!r}")
    # Lejos del lienzo da igual la distancia exacta
    x = max(-COORD_LIMIT, min(COORD_LIMIT, x))
    y = max(-COORD_LIMIT, min(COORD_LIMIT, y))
    return int(round(x)), int(round(y))
