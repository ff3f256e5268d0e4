import base64

import cv2
import numpy as np
import pytest
from django.apps import apps

from coloring.application.actions.tool_action import ToolState
from coloring.application.use_cases.canvas_editor import CanvasEditor
from coloring.application.use_cases.generate_image import ColoringPageService
from coloring.application.use_cases.rate_limiter import RateLimiter
from coloring.domain.services.image_generator import ImageGeneratorPort

WHITE = (255, 255, 255, 255)
BLACK = (0, 0, 0, 255)
RED = (255, 0, 0, 255)
BLUE = (0, 0, 255, 255)


class FakeClock:
    def __init__(self, start=1000.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


class FakeGenerator(ImageGeneratorPort):
    def __init__(self, image, configured=True, error=None):
        self.image = image
        self._configured = configured
        self.error = error
        self.prompts = []

    @property
    def configured(self):
        return self._configured

    def generate(self, prompt):
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.image


def blank(width, height, color=WHITE):
    pixels = np.empty((height, width, 4), np.uint8)
    pixels[:] = color
    return pixels


def ring_buffer():
    """10x10 blanco con un anillo negro de 1 px alrededor de un interior 3x3 (x, y en 3..5)."""
    pixels = blank(10, 10)
    pixels[2, 2:7] = BLACK
    pixels[6, 2:7] = BLACK
    pixels[2:7, 2] = BLACK
    pixels[2:7, 6] = BLACK
    return pixels


def png_bytes(rgba):
    ok, buf = cv2.imencode(".png", cv2.cvtColor(rgba, cv2.COLOR_RGBA2BGRA))
    assert ok
    return buf.tobytes()


def data_uri(data):
    return "data:image/png;base64," + base64.b64encode(data).decode("ascii")


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def generator():
    return FakeGenerator(data_uri(png_bytes(blank(4, 4))))


@pytest.fixture
def coloring_app(clock, generator, tmp_path):
    """Servicios de la app reemplazados por instancias frescas para cada prueba."""
    config = apps.get_app_config("coloring")
    saved = {name: getattr(config, name) for name in ("editor", "tools", "rate_limiter", "generator", "pages")}

    config.editor = CanvasEditor(width=40, height=30, history_limit=10, fill_tolerance=32)
    config.tools = ToolState()
    config.rate_limiter = RateLimiter(10, 60, clock=clock)
    config.generator = generator
    config.pages = ColoringPageService(generator, config.rate_limiter, tmp_path)

    yield config

    for name, value in saved.items():
        setattr(config, name, value)
