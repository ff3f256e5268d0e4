import numpy as np

WHITE = (255, 255, 255, 255)


class PixelBuffer:
    """
    Matriz RGBA (alto x ancho x 4, uint8) del lienzo.
    Las dimensiones se fijan al crearla y no cambian nunca.
    """

    def __init__(self, width, height, fill=WHITE):
        if width <= 0 or height <= 0:
            raise ValueError(f"Dimensiones de lienzo inválidas: {width}x{height}")
        self._pixels = np.empty((height, width, 4), np.uint8)
        self._pixels[:] = fill

    @property
    def width(self):
        return self._pixels.shape[1]

    @property
    def height(self):
        return self._pixels.shape[0]

    @property
    def pixels(self):
        """Vista mutable de los píxeles (se modifica en sitio)."""
        return self._pixels

    def copy_pixels(self):
        return self._pixels.copy()

    def replace(self, pixels):
        """Copia `pixels` dentro del buffer sin cambiar sus dimensiones."""
        if pixels.shape != self._pixels.shape:
            raise ValueError(
                f"Tamaño incompatible: {pixels.shape[1]}x{pixels.shape[0]} "
                f"en lienzo de {self.width}x{self.height}"
            )
        self._pixels[:] = pixels
