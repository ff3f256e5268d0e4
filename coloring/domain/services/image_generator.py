from abc import ABC, abstractmethod


class ImageGeneratorPort(ABC):
    @abstractmethod
    def generate(self, prompt):
        """Devuelve un data URI PNG con el dibujo generado para `prompt`."""

    @property
    @abstractmethod
    def configured(self):
        pass
