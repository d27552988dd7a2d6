#!filepath: tests/utils/test_logger.py
import pytest
from loguru import logger

from entropy_sweep import logs
from entropy_sweep.config.log_config import LogConfig


@pytest.fixture
def captured():
    lines = []
    sink_id = logger.add(lambda msg: lines.append(str(msg)), level="DEBUG")
    yield lines
    logger.remove(sink_id)


def test_catch_logs_time_and_returns(captured):
    @logs.catch()
    def add(a, b):
        return a + b

    assert add(1, 2) == 3
    assert any("add] took" in line for line in captured)


def test_catch_logs_and_reraises(captured):
    @logs.catch(msg="exploded")
    def boom():
        raise ValueError("bad input")

    with pytest.raises(ValueError, match="bad input"):
        boom()

    output = "\n".join(captured)
    assert "boom] exploded" in output
    assert "ValueError" in output


def test_configure_writes_into_log_dir(tmp_path):
    logs.configure(LogConfig(dir=str(tmp_path / "logs"), level="DEBUG"))
    try:
        logs.info("hello from test")
        logger.complete()
    finally:
        logger.remove()

    written = list((tmp_path / "logs").glob("*.log"))
    assert len(written) == 1
    assert "hello from test" in written[0].read_text(encoding="utf-8")
