from pathlib import Path

# Orden de búsqueda: la primera palabra contenida en el tema gana
PRESETS = [
    "dinosaur",
    "unicorn",
    "robot",
    "butterfly",
    "car",
    "flower",
    "spaceship",
    "castle",
    "dragon",
    "cat",
]

STATIC_PREFIX = "coloring/assets"


def asset_name(preset):
    return f"{preset}-little.png"


def find_preset(topic):
    """Primer preset contenido en `topic` (sin distinguir mayúsculas), o None."""
    text = (topic or "").lower()
    for preset in PRESETS:
        if preset in text:
            return preset
    return None


def static_path(preset):
    """Ruta relativa a STATIC_URL del dibujo precargado."""
    return f"{STATIC_PREFIX}/{asset_name(preset)}"


def asset_file(preset, asset_dir):
    return Path(asset_dir) / asset_name(preset)
