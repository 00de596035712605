import time
from datetime import datetime

def now_iso() -> str:
    return datetime.now().replace(microsecond=0).isoformat()

def elapsed_ms(start: float, end: float) -> float:
    return (end - start) * 1000.0

monotonic_clock = time.perf_counter
