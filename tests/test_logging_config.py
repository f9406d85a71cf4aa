import json
import logging

from vekta.config import VektaConfig
from vekta.logging_config import configure_logging
from vekta.telemetry import log_event


def test_progress_lines_go_to_stderr(capsys) -> None:
    configure_logging(VektaConfig())

    logging.getLogger("vekta.pipelines").info("Processing file: %s", "a.txt")

    captured = capsys.readouterr()
    assert captured.err == "Processing file: a.txt\n"
    assert captured.out == ""


def test_quiet_mode_hides_progress_but_keeps_errors(capsys) -> None:
    configure_logging(VektaConfig(quiet=True))
    logger = logging.getLogger("vekta.cli")

    logger.info("Initializing text embedding model...")
    logger.error("Error: %s", "boom")

    assert capsys.readouterr().err == "Error: boom\n"


def test_json_format_emits_one_object_per_record(capsys) -> None:
    configure_logging(VektaConfig(log_format="json", log_level="DEBUG"))

    logging.getLogger("vekta.resources").info("Using batch size: %s", 8)
    log_event(logging.getLogger("vekta.telemetry"), "embeddings.compute", details={"count": 2})

    lines = capsys.readouterr().err.splitlines()
    first, second = (json.loads(line) for line in lines)
    assert first["message"] == "Using batch size: 8"
    assert first["level"] == "INFO"
    assert first["module"] == "vekta.resources"
    assert second["step"] == "embeddings.compute"
    assert second["details"] == {"count": 2}


def test_structured_events_render_as_text(capsys) -> None:
    configure_logging(VektaConfig(log_level="DEBUG"))

    log_event(logging.getLogger("vekta.telemetry"), "rerank.compute", duration_ms=1.23456)

    assert capsys.readouterr().err == "rerank.compute duration_ms=1.235\n"
