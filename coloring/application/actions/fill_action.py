import numpy as np

from coloring.application.actions import color_action

DEFAULT_TOLERANCE = 32


def flood_fill(pixels, seed, fill_color, tolerance=DEFAULT_TOLERANCE):
    """
    Rellena (4-conectado) la región de color parecido al de `seed`.

    Usa una pila explícita de segmentos horizontales: cada elemento es un
    píxel semilla; se expande a izquierda y derecha sobre su fila y se apilan
    los inicios de tramo elegibles de las filas vecinas. La máscara de
    elegibles se calcula una vez y hace de marca de visitado.

    Devuelve la caja rellenada (x0, y0, x1, y1) exclusiva, o None si no hubo
    cambios (semilla fuera del lienzo o color de relleno ya igual al destino).
    """
    h, w = pixels.shape[:2]
    x, y = int(seed[0]), int(seed[1])
    if not (0 <= x < w and 0 <= y < h):
        return None

    target = tuple(int(c) for c in pixels[y, x])
    fill = np.asarray(fill_color, dtype=np.uint8)
    if color_action.colors_match(fill, target, tolerance):
        return None

    eligible = color_action.distance_map(pixels, target) <= tolerance

    x0, y0, x1, y1 = x, y, x + 1, y + 1
    stack = [(x, y)]
    while stack:
        x, y = stack.pop()
        row = eligible[y]
        if not row[x]:
            continue

        left = x
        while left > 0 and row[left - 1]:
            left -= 1
        right = x
        while right < w - 1 and row[right + 1]:
            right += 1

        row[left:right + 1] = False
        pixels[y, left:right + 1] = fill

        x0, x1 = min(x0, left), max(x1, right + 1)
        y0, y1 = min(y0, y), max(y1, y + 1)

        for ny in (y - 1, y + 1):
            if 0 <= ny < h:
                stack.extend(_run_starts(eligible[ny, left:right + 1], left, ny))

    return x0, y0, x1, y1


def _run_starts(segment, offset, y):
    """Inicio de cada tramo continuo de True dentro de `segment`."""
    if not segment.any():
        return []
    previous = np.concatenate(([False], segment[:-1]))
    starts = np.flatnonzero(segment & ~previous)
    return [(offset + int(s), y) for s in starts]
