import numpy as np

# ---------------------- Paleta ----------------------
# Colores RGB pensados para niños (primarios, secundarios y neutros)
PALETTE = {
    "red": "#E53935",
    "yellow": "#FDD835",
    "blue": "#1E88E5",
    "orange": "#FB8C00",
    "green": "#43A047",
    "purple": "#8E24AA",
    "brown": "#6D4C41",
    "grey": "#757575",
    "black": "#000000",
    "white": "#FFFFFF",
}

DEFAULT_COLOR = "#FF6B6B"


# ---------------------- Conversión ----------------------
def parse_color(value):
    """
    Convierte un color a tupla RGBA.
    Acepta '#RGB', '#RRGGBB', '#RRGGBBAA', un nombre de la paleta
    o una secuencia de 3/4 enteros.
    """
    if isinstance(value, str):
        text = value.strip()
        if text.lower() in PALETTE:
            text = PALETTE[text.lower()]
        if not text.startswith("#"):
            raise ValueError(f"Color no reconocido: {value!r}")
        digits = text[1:]
        if len(digits) == 3:
            digits = "".join(c * 2 for c in digits)
        if len(digits) == 6:
            digits += "FF"
        if len(digits) != 8:
            raise ValueError(f"Color no reconocido: {value!r}")
        try:
            return tuple(int(digits[i:i + 2], 16) for i in range(0, 8, 2))
        except ValueError:
            raise ValueError(f"Color no reconocido: {value!r}") from None

    channels = [int(c) for c in value]
    if len(channels) == 3:
        channels.append(255)
    if len(channels) != 4 or any(c < 0 or c > 255 for c in channels):
        raise ValueError(f"Color no reconocido: {value!r}")
    return tuple(channels)


def to_hex(color):
    r, g, b = color[:3]
    return f"#{r:02X}{g:02X}{b:02X}"


# ---------------------- Distancia ----------------------
def color_distance(c1, c2):
    """Mayor diferencia absoluta entre canales RGBA."""
    return max(abs(int(a) - int(b)) for a, b in zip(c1, c2))


def colors_match(c1, c2, tolerance):
    return color_distance(c1, c2) <= tolerance


def distance_map(pixels, color):
    """`color_distance` de cada píxel de la matriz contra `color` (alto x ancho)."""
    target = np.asarray(color, dtype=np.int16)
    return np.abs(pixels.astype(np.int16) - target).max(axis=2)
