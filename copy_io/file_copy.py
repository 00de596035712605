import os
import shutil


def copy_stream(src: str, dst: str, chunk_size: int = 1024 * 1024) -> int:
    """Copy src over dst (truncating any existing file). Returns bytes copied."""
    copied = 0
    with open(src, "rb") as fsrc, open(dst, "wb") as fdst:
        while True:
            buf = fsrc.read(chunk_size)
            if not buf:
                break
            fdst.write(buf)
            copied += len(buf)
    shutil.copystat(src, dst, follow_symlinks=False)
    return copied


def remove_if_exists(path: str) -> bool:
    """Delete path. Returns False if it was already gone; other OSErrors propagate."""
    try:
        os.remove(path)
    except FileNotFoundError:
        return False
    return True
