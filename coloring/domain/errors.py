class ColoringError(Exception):
    """Error base de la app; `status` es el código HTTP con el que se reporta."""
    status = 500

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class PromptError(ColoringError):
    status = 400


class RateLimitExceeded(ColoringError):
    status = 429

    def __init__(self, message, retry_after=None):
        super().__init__(message)
        self.retry_after = retry_after


class GenerationConfigError(ColoringError):
    status = 500


class GenerationFailed(ColoringError):
    status = 500


class BackgroundLoadError(ColoringError):
    status = 400
