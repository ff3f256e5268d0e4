import requests

from coloring.domain.errors import GenerationFailed
from coloring.domain.services.image_generator import ImageGeneratorPort

API_URL = "https://api.openai.com/v1/images/generations"


class OpenAIImageClient(ImageGeneratorPort):
    """Cliente de la API de imágenes; la clave nunca sale del servidor."""

    def __init__(self, api_key, model="dall-e-3", size="1024x1024", timeout=60):
        self.api_key = api_key
        self.model = model
        self.size = size
        self.timeout = timeout

    @property
    def configured(self):
        return bool(self.api_key)

    def generate(self, prompt):
        payload = {
            "model": self.model,
            "prompt": prompt,
            "n": 1,
            "size": self.size,
            "quality": "standard",
            "response_format": "b64_json",
        }
        headers = {"Authorization": f"Bearer {self.api_key}"}

        try:
            r = requests.post(API_URL, json=payload, headers=headers, timeout=self.timeout)
        except requests.Timeout:
            raise GenerationFailed("The image generator took too long to answer. Please try again.") from None
        except requests.RequestException as e:
            raise GenerationFailed(f"Could not reach the image generator: {e}") from e

        try:
            data = r.json()
        except ValueError:
            raise GenerationFailed(f"Image generator returned an invalid response ({r.status_code})") from None

        if not isinstance(data, dict):
            raise GenerationFailed("Image generator returned an invalid response")

        error = data.get("error")
        if error:
            message = error.get("message") if isinstance(error, dict) else str(error)
            print(f"[ERROR] Generador de imágenes: {message}")
            raise GenerationFailed(message or "Failed to generate image")

        try:
            b64 = data["data"][0]["b64_json"]
        except (KeyError, IndexError, TypeError):
            b64 = None
        if not b64:
            raise GenerationFailed("No image data in response")

        return f"data:image/png;base64,{b64}"
