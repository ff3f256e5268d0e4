import math

import cv2
import numpy as np

WHITE = (255, 255, 255, 255)


def blank_canvas(h, w, color=WHITE):
    """Lienzo RGBA liso del tamaño indicado."""
    canvas = np.empty((h, w, 4), np.uint8)
    canvas[:] = color
    return canvas


def interpolate_points(p1, p2, step):
    """
    Puntos enteros entre p1 y p2 (ambos incluidos) separados como mucho
    `step` píxeles, para que los círculos estampados se solapen.
    """
    x1, y1 = p1
    x2, y2 = p2
    dist = math.hypot(x2 - x1, y2 - y1)
    count = max(1, int(math.ceil(dist / max(step, 1e-6))))
    return [
        (int(round(x1 + (x2 - x1) * t)), int(round(y1 + (y2 - y1) * t)))
        for t in np.linspace(0.0, 1.0, count + 1)
    ]


def clip_segment(p1, p2, x_min, y_min, x_max, y_max):
    """
    Recorta el segmento p1 -> p2 al rectángulo (Liang-Barsky).
    Devuelve los extremos recortados, o None si queda todo fuera.
    """
    x1, y1 = p1
    x2, y2 = p2
    dx, dy = x2 - x1, y2 - y1
    t0, t1 = 0.0, 1.0
    for p, q in ((-dx, x1 - x_min), (dx, x_max - x1), (-dy, y1 - y_min), (dy, y_max - y1)):
        if p == 0:
            if q < 0:
                return None
            continue
        t = q / p
        if p < 0:
            if t > t1:
                return None
            t0 = max(t0, t)
        else:
            if t < t0:
                return None
            t1 = min(t1, t)
    return (x1 + t0 * dx, y1 + t0 * dy), (x1 + t1 * dx, y1 + t1 * dy)


def segment_mask(h, w, p1, p2, radius):
    """
    Máscara (uint8, 255 = pintado) de un segmento de trazo: círculos llenos
    de `radius` cada medio radio a lo largo de la recta p1 -> p2.
    Solo se recorre la parte que puede tocar el lienzo.
    """
    mask = np.zeros((h, w), np.uint8)
    clipped = clip_segment(p1, p2, -radius, -radius, w - 1 + radius, h - 1 + radius)
    if clipped is None:
        return mask

    step = max(1.0, radius / 2.0)
    for cx, cy in interpolate_points(*clipped, step):
        cv2.circle(mask, (cx, cy), radius, 255, -1)
    return mask
