import numpy as np


class HistoryEntry:
    """
    Estado previo de una operación: solo la caja que cambió (x, y) y sus
    píxeles anteriores. Una entrada vacía (sin cambios) también se apila
    para que cada acción del usuario tenga su propio deshacer.
    """

    def __init__(self, label, x=0, y=0, before=None):
        self.label = label  # stroke | fill | clear
        self.x = x
        self.y = y
        self.before = before

    @classmethod
    def from_diff(cls, label, before, after):
        """Construye la entrada comparando el buffer completo antes y después."""
        changed = np.any(before != after, axis=2)
        rows = np.flatnonzero(changed.any(axis=1))
        if rows.size == 0:
            return cls(label)
        cols = np.flatnonzero(changed.any(axis=0))
        y0, y1 = int(rows[0]), int(rows[-1]) + 1
        x0, x1 = int(cols[0]), int(cols[-1]) + 1
        return cls(label, x0, y0, before[y0:y1, x0:x1].copy())

    def restore(self, pixels):
        if self.before is None:
            return
        h, w = self.before.shape[:2]
        pixels[self.y:self.y + h, self.x:self.x + w] = self.before
