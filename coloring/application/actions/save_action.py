import base64
import binascii
import re
from pathlib import Path

import cv2
import numpy as np
from django.utils import timezone

from coloring.domain.errors import BackgroundLoadError, ColoringError
from coloring.infrastructure.opencv.draw_utils import blank_canvas

DATA_URI_RE = re.compile(r"^data:image/[\w.+-]+;base64,(?P<data>.+)$", re.DOTALL)


# ===============================
# 🔹 LECTURA DE IMÁGENES
# ===============================

def read_source(source):
    """
    Obtiene los bytes de una imagen a partir de bytes, un data URI
    o una ruta de archivo.
    """
    if isinstance(source, (bytes, bytearray, memoryview)):
        return bytes(source)

    if isinstance(source, str) and source.lstrip().startswith("data:"):
        match = DATA_URI_RE.match(source.strip())
        if not match:
            raise BackgroundLoadError("The image data URI is not valid.")
        try:
            return base64.b64decode(match.group("data"))
        except (binascii.Error, ValueError):
            raise BackgroundLoadError("The image data URI is not valid base64.") from None

    path = Path(source)
    if not path.is_file():
        raise BackgroundLoadError(f"Image not found: {path.name}")
    return path.read_bytes()


def decode_image(data):
    """Decodifica PNG/JPEG/... a una matriz RGBA uint8."""
    if not data:
        raise BackgroundLoadError("The image is empty.")
    img = cv2.imdecode(np.frombuffer(data, np.uint8), cv2.IMREAD_UNCHANGED)
    if img is None:
        raise BackgroundLoadError("Could not decode the image.")
    return to_rgba(img)


def to_rgba(img):
    if img.dtype == np.uint16:
        img = (img >> 8).astype(np.uint8)
    elif img.dtype != np.uint8:
        img = cv2.convertScaleAbs(img)

    if img.ndim == 2:
        return cv2.cvtColor(img, cv2.COLOR_GRAY2RGBA)
    if img.shape[2] == 3:
        return cv2.cvtColor(img, cv2.COLOR_BGR2RGBA)
    return cv2.cvtColor(img, cv2.COLOR_BGRA2RGBA)


def flatten_on_white(rgba):
    """Compone la transparencia sobre blanco; el resultado es opaco."""
    alpha = rgba[:, :, 3:4].astype(np.float32) / 255.0
    rgb = rgba[:, :, :3].astype(np.float32) * alpha + 255.0 * (1.0 - alpha)
    out = np.empty_like(rgba)
    out[:, :, :3] = np.clip(np.round(rgb), 0, 255).astype(np.uint8)
    out[:, :, 3] = 255
    return out


def fit_to_canvas(rgba, width, height):
    """
    Escala la imagen conservando la proporción para que quepa en el lienzo
    y la centra sobre fondo blanco.
    """
    h, w = rgba.shape[:2]
    scale = min(width / w, height / h)
    new_w = min(width, max(1, int(round(w * scale))))
    new_h = min(height, max(1, int(round(h * scale))))

    if (new_w, new_h) != (w, h):
        interpolation = cv2.INTER_AREA if scale < 1 else cv2.INTER_LINEAR
        rgba = cv2.resize(rgba, (new_w, new_h), interpolation=interpolation)

    canvas = blank_canvas(height, width)
    x = (width - new_w) // 2
    y = (height - new_h) // 2
    canvas[y:y + new_h, x:x + new_w] = flatten_on_white(rgba)
    return canvas


def load_background_image(source, width, height):
    """Lee, decodifica y ajusta una imagen de fondo al tamaño del lienzo."""
    return fit_to_canvas(decode_image(read_source(source)), width, height)


# ===============================
# 🔹 EXPORTACIÓN
# ===============================

def encode_png(pixels):
    ok, buffer = cv2.imencode(".png", cv2.cvtColor(pixels, cv2.COLOR_RGBA2BGRA))
    if not ok:
        raise ColoringError("Could not encode the drawing as PNG.")
    return buffer.tobytes()


def to_data_uri(png_bytes, mime="image/png"):
    return f"data:{mime};base64,{base64.b64encode(png_bytes).decode('ascii')}"


def export_filename(now=None):
    now = now or timezone.now()
    return f"coloring-page-{now.strftime('%Y%m%d-%H%M%S')}.png"
