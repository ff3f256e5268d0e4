from collections import deque

DEFAULT_LIMIT = 30


class History:
    """
    Pila de deshacer con profundidad máxima; al superarla se descarta la
    entrada más antigua. No hay pila de rehacer: cada acción nueva sustituye
    cualquier futuro posible.
    """

    def __init__(self, limit=DEFAULT_LIMIT):
        if limit is not None and limit < 1:
            raise ValueError("El historial necesita al menos una entrada")
        self.limit = limit
        self._entries = deque(maxlen=limit)

    def __len__(self):
        return len(self._entries)

    def push(self, entry):
        """Registra el estado previo de una acción nueva."""
        self._entries.append(entry)

    def pop(self):
        """Saca la entrada más reciente, o None si no hay nada que deshacer."""
        if not self._entries:
            print("[UNDO] No hay acciones para deshacer.")
            return None
        return self._entries.pop()

    def clear(self):
        """Vaciar la pila al cargar un fondo nuevo."""
        self._entries.clear()
