import pytest


class FakeClock:
    """Returns preset readings in seconds, one per call."""

    def __init__(self, readings):
        self.readings = list(readings)

    def __call__(self):
        return self.readings.pop(0)


@pytest.fixture
def source_file(tmp_path):
    p = tmp_path / "src" / "payload.bin"
    p.parent.mkdir()
    p.write_bytes(b"\x01" * 4096)
    return p


@pytest.fixture
def dest_dir(tmp_path):
    return tmp_path / "dest"


@pytest.fixture
def fake_clock():
    return FakeClock
