import io
import logging

import pytest
from rich.console import Console

from nitromesh.logging import configure_logging, get_logger, section, step
from nitromesh.reporting import (
    PlainReporter,
    RichReporter,
    SilentReporter,
    get_reporter,
    set_reporter,
    set_verbosity,
    task,
)


@pytest.fixture
def plain():
    stream = io.StringIO()
    rep = PlainReporter(stream=stream, use_color=False)
    set_reporter(rep)
    yield stream
    set_reporter(SilentReporter())
    set_verbosity(0)


def test_task_success_line_includes_stats(plain):
    with task("mesh.read", "Read quad.msh") as stats:
        stats.update(triangles=2, vertices=4, stray=0)
    out = plain.getvalue()
    assert out.startswith(" ✔ Read quad.msh (")
    assert out.rstrip().endswith("[triangles=2 vertices=4 stray=0]")


def test_task_failure_is_reported_and_reraised(plain):
    with pytest.raises(RuntimeError):
        with task("mesh.write", "Write quad.msh"):
            raise RuntimeError("boom")
    assert plain.getvalue().startswith(" ✖ Write quad.msh")


def test_verbose_gated_by_verbosity(plain):
    rep = get_reporter()
    rep.verbose("hidden")
    set_verbosity(1)
    rep.verbose("shown")
    assert plain.getvalue() == "VERB1: shown\n"


def test_logging_routes_to_reporter(plain):
    configure_logging(0)
    logger = get_logger()
    logger.warning("odd index count")
    logger.info("read ok")
    logger.debug("not at info level")
    assert plain.getvalue() == "WARN: odd index count\nINFO: read ok\n"


def test_section_and_step(plain):
    with section("Decode") as logger:
        assert isinstance(logger, logging.Logger)
        step("header")
    assert plain.getvalue() == "\n[Decode]\nINFO:   -> header\n"


def test_rich_reporter_prints_completion(monkeypatch):
    monkeypatch.delenv("NITROMESH_PROGRESS_TRANSIENT", raising=False)
    buf = io.StringIO()
    rep = RichReporter(console=Console(file=buf, width=100, color_system=None))
    set_reporter(rep)
    try:
        with task("mesh.write", "Write quad.msh", total=1) as stats:
            rep.advance("mesh.write")
            stats.update(bytes=305)
        rep.status("done")
    finally:
        set_reporter(SilentReporter())
    out = buf.getvalue()
    assert "Write quad.msh" in out
    assert "[bytes=305]" in out
    assert "INFO: done" in out
    assert rep.progress is None


def test_rich_reporter_transient_buffers_completions_until_flush(monkeypatch):
    monkeypatch.setenv("NITROMESH_PROGRESS_TRANSIENT", "1")
    buf = io.StringIO()
    rep = RichReporter(console=Console(file=buf, width=100, color_system=None))
    rep.start_task("mesh.read", "Read quad.msh", total=1)
    rep.start_task("mesh.write", "Write quad.msh", total=1)
    rep.end_task("mesh.read", triangles=2)
    assert "[triangles=2]" not in buf.getvalue()
    assert len(rep._transient_completions) == 1

    rep.end_task("mesh.write", bytes=305)
    out = buf.getvalue()
    assert "[triangles=2]" in out
    assert "[bytes=305]" in out
    assert out.index("Read quad.msh") < out.index("Write quad.msh")
    assert rep.progress is None
    assert rep._transient_completions == []
