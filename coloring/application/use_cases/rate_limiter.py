import threading
import time

SWEEP_EVERY = 256


class RateLimiter:
    """
    Límite por cliente con ventana deslizante: como mucho `max_requests`
    en los últimos `window_seconds`. `clock` se puede sustituir en pruebas.
    Las peticiones rechazadas no cuentan.

    Cada `sweep_every` llamadas se eliminan los clientes sin peticiones
    dentro de la ventana, para que el diccionario no crezca sin límite.
    """

    def __init__(self, max_requests=10, window_seconds=60, clock=time.monotonic,
                 sweep_every=SWEEP_EVERY):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.clock = clock
        self.sweep_every = sweep_every
        self.requests = {}
        self._calls = 0
        self._lock = threading.Lock()

    def _recent(self, client_id, now):
        window_start = now - self.window_seconds
        recent = [t for t in self.requests.get(client_id, []) if t > window_start]
        if recent:
            self.requests[client_id] = recent
        else:
            self.requests.pop(client_id, None)
        return recent

    def _sweep(self, now):
        window_start = now - self.window_seconds
        stale = [key for key, times in self.requests.items() if times[-1] <= window_start]
        for key in stale:
            del self.requests[key]

    def is_allowed(self, client_id):
        with self._lock:
            now = self.clock()
            self._calls += 1
            if self._calls % self.sweep_every == 0:
                self._sweep(now)
            recent = self._recent(client_id, now)
            if len(recent) >= self.max_requests:
                return False
            recent.append(now)
            self.requests[client_id] = recent
            return True

    def retry_after(self, client_id):
        """Segundos hasta que se libere un hueco para `client_id`."""
        with self._lock:
            now = self.clock()
            recent = self._recent(client_id, now)
            if len(recent) < self.max_requests:
                return 0
            return max(0.0, recent[0] + self.window_seconds - now)
