import json
import logging
from pathlib import Path

from bootgather.observers.dispatcher import EventBus
from bootgather.observers.events import BundleCaptured, GatherStarted, new_ctx
from bootgather.observers.jsonfile import JsonFileObserver
from bootgather.observers.logger import LoggerObserver


class Capture:
    def __init__(self): self.events = []
    def notify(self, ev): self.events.append(ev)


class Broken:
    def notify(self, ev): raise RuntimeError("observer bug")


def test_bus_survives_broken_observer():
    cap = Capture()
    bus = EventBus([Broken(), cap])
    bus.emit(GatherStarted(**new_ctx("/tmp/install"), state_present=True))
    assert len(cap.events) == 1


def test_new_ctx_reuses_run_id():
    assert new_ctx("/d", "run-1")["run_id"] == "run-1"
    assert new_ctx("/d")["run_id"] != new_ctx("/d")["run_id"]


def test_json_file_observer_appends_lines(tmp_path: Path):
    path = tmp_path / "events" / "run.jsonl"
    ob = JsonFileObserver(path)
    ctx = new_ctx(str(tmp_path), "run-1")
    ob.notify(GatherStarted(**ctx, state_present=False))
    ob.notify(BundleCaptured(**ctx, path="/x/log-bundle.tar.gz"))

    lines = [json.loads(l) for l in path.read_text().splitlines()]
    assert [l["type"] for l in lines] == ["GatherStarted", "BundleCaptured"]
    assert lines[1]["path"] == "/x/log-bundle.tar.gz"
    assert {l["run_id"] for l in lines} == {"run-1"}


def test_logger_observer(caplog):
    logger = logging.getLogger("bootgather")
    with caplog.at_level(logging.DEBUG, logger="bootgather"):
        LoggerObserver(logger).notify(GatherStarted(**new_ctx("/d", "run-1"), state_present=True))
    assert "[gather] GatherStarted state_present=True" in caplog.text
    assert "run-1" not in caplog.text
