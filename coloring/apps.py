from django.apps import AppConfig
from django.conf import settings


class ColoringConfig(AppConfig):
    """
    Construye una sola vez por proceso el editor, el limitador y el cliente
    de generación. Las vistas los obtienen con `apps.get_app_config("coloring")`.
    """
    name = "coloring"
    verbose_name = "DoodleDream coloring book"

    def ready(self):
        from coloring.application.actions.tool_action import ToolState
        from coloring.application.use_cases.canvas_editor import CanvasEditor
        from coloring.application.use_cases.generate_image import ColoringPageService
        from coloring.application.use_cases.rate_limiter import RateLimiter
        from coloring.infrastructure.openai.image_client import OpenAIImageClient

        conf = settings.COLORING

        self.editor = CanvasEditor(
            width=conf["CANVAS_WIDTH"],
            height=conf["CANVAS_HEIGHT"],
            history_limit=conf["HISTORY_LIMIT"],
            fill_tolerance=conf["FILL_TOLERANCE"],
        )
        self.tools = ToolState()
        self.rate_limiter = RateLimiter(conf["RATE_LIMIT"], conf["RATE_WINDOW"])
        self.generator = OpenAIImageClient(
            api_key=conf["OPENAI_API_KEY"],
            model=conf["IMAGE_MODEL"],
            size=conf["IMAGE_SIZE"],
            timeout=conf["UPSTREAM_TIMEOUT"],
        )
        self.pages = ColoringPageService(self.generator, self.rate_limiter, conf["ASSET_DIR"])

        print(f"[INFO] Lienzo de {self.editor.width}x{self.editor.height} listo. "
              f"OpenAI API key: {'configurada' if self.generator.configured else 'no configurada'}.")
