"""
Tests for the run log.
"""
import threading

from artifacts.logger import RunLogger


def test_lines_are_tagged_with_thread(tmp_path):
    log = RunLogger(str(tmp_path / "run.log"))
    log.log("hello")

    t = threading.Thread(target=log.log, args=("from worker",), name="repeat-copy_0")
    t.start()
    t.join()

    lines = (tmp_path / "run.log").read_text(encoding="utf-8").splitlines()
    assert lines[0].endswith(f"[{threading.current_thread().name}] hello")
    assert lines[1].endswith("[repeat-copy_0] from worker")


def test_concurrent_writers_keep_whole_lines(tmp_path):
    log = RunLogger(str(tmp_path / "logs" / "run.log"))

    def write(tag):
        for i in range(50):
            log.log(f"{tag}-{i}")

    threads = [threading.Thread(target=write, args=(t,)) for t in ("a", "b", "c")]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    lines = (tmp_path / "logs" / "run.log").read_text(encoding="utf-8").splitlines()
    assert len(lines) == 150
    assert all(line.split("] ", 1)[1].split("-")[0] in ("a", "b", "c") for line in lines)
