import os
import threading
from utils.timeutil import now_iso

class RunLogger:
    """Append-only run log shared by the UI thread and the copy worker."""

    def __init__(self, path: str):
        self.path = path
        self._lock = threading.Lock()
        parent = os.path.dirname(path)
        if parent:
            os.makedirs(parent, exist_ok=True)

    def log(self, msg: str):
        line = f"{now_iso()} [{threading.current_thread().name}] {msg}\n"
        with self._lock, open(self.path, "a", encoding="utf-8") as f:
            f.write(line)
