from coloring.application.use_cases import asset_lookup
from coloring.domain.errors import GenerationConfigError, PromptError, RateLimitExceeded

MAX_PROMPT_LENGTH = 500

RATE_LIMIT_MESSAGE = "Too many requests. Please wait a minute before trying again."

# Una frase del prompt cambia según la dificultad elegida
COMPLEXITY_HINTS = {
    "simple": "Simple shapes suitable for young children to color.",
    "medium": "A few more details, suitable for school-age children to color.",
    "detailed": "Rich details and patterns, suitable for older children who like a challenge.",
}
DEFAULT_COMPLEXITY = "simple"


def validate_prompt(prompt):
    """Devuelve el prompt recortado o lanza PromptError."""
    if prompt is None or prompt == "":
        raise PromptError("Prompt is required")
    if not isinstance(prompt, str):
        raise PromptError("Prompt must be a string")

    trimmed = prompt.strip()
    if not trimmed:
        raise PromptError("Prompt cannot be empty")
    if len(trimmed) > MAX_PROMPT_LENGTH:
        raise PromptError(f"Prompt must be {MAX_PROMPT_LENGTH} characters or less")
    return trimmed


def normalize_complexity(complexity):
    return complexity if complexity in COMPLEXITY_HINTS else DEFAULT_COMPLEXITY


def build_coloring_prompt(topic, complexity=DEFAULT_COMPLEXITY):
    """
    Envuelve el tema en el prompt fijo de libro de colorear. Solo el tema
    (con espacios normalizados) viaja al generador.
    """
    topic = " ".join(topic.split())
    hint = COMPLEXITY_HINTS[normalize_complexity(complexity)]
    return (
        f"A simple black and white coloring book page illustration of: {topic}. "
        "Style: Clean line art with thick black outlines on pure white background. "
        f"{hint} "
        "No shading, no gray tones, no colors - just black lines on white. "
        "Cute and child-friendly design."
    )


class ColoringPageService:
    """
    Flujo único para conseguir un dibujo: primero los presets estáticos y,
    si ninguno coincide, el generador externo detrás del limitador.
    """

    def __init__(self, generator, rate_limiter, asset_dir):
        self.generator = generator
        self.rate_limiter = rate_limiter
        self.asset_dir = asset_dir

    def generate(self, client_id, prompt, complexity=None):
        """Proxy de generación: límite, validación y llamada al generador."""
        if not self.rate_limiter.is_allowed(client_id):
            print(f"[GEN] Límite alcanzado para {client_id}.")
            raise RateLimitExceeded(
                RATE_LIMIT_MESSAGE, retry_after=self.rate_limiter.retry_after(client_id)
            )

        topic = validate_prompt(prompt)

        if not self.generator.configured:
            raise GenerationConfigError("OPENAI_API_KEY not configured. Add it to the .env file")

        print(f'[GEN] Generando dibujo para: "{topic}"')
        image = self.generator.generate(build_coloring_prompt(topic, complexity))
        print("[GEN] Dibujo generado correctamente.")
        return image

    def coloring_page(self, client_id, topic, complexity=None):
        """
        Devuelve {"source": "asset", "preset", "path", "file"} para un preset
        o {"source": "generated", "image"} con el data URI generado.
        """
        preset = asset_lookup.find_preset(topic) if isinstance(topic, str) else None
        if preset is not None:
            print(f"[GEN] Usando dibujo precargado: {preset}")
            return {
                "source": "asset",
                "preset": preset,
                "path": asset_lookup.static_path(preset),
                "file": asset_lookup.asset_file(preset, self.asset_dir),
            }

        return {"source": "generated", "image": self.generate(client_id, topic, complexity)}
