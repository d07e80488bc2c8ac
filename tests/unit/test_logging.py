"""Tests for structured logging setup."""
import json


class TestLogging:
    """Test configure_logging and helpers."""

    def test_configure_logging_writes_json_to_stderr(self, capsys):
        from skill_router.logging_utils import configure_logging, get_logger, log_skills_loaded

        configure_logging("INFO")
        log_skills_loaded(get_logger("test"), "skills", 3)

        captured = capsys.readouterr()
        record = json.loads(captured.err.strip().splitlines()[-1])
        assert captured.out == ""
        assert record["event"] == "skills_loaded"
        assert record["count"] == 3
        assert record["app"] == "skill-router"
        assert record["level"] == "info"

    def test_configure_logging_filters_below_level(self, capsys):
        from skill_router.logging_utils import configure_logging, get_logger

        configure_logging("WARNING")
        get_logger("test").info("hidden_event")

        assert "hidden_event" not in capsys.readouterr().err

    def test_log_pick_truncates_long_queries(self, capsys):
        from skill_router.logging_utils import configure_logging, get_logger, log_pick

        configure_logging("INFO")
        log_pick(get_logger("test"), "x" * 300, "demo", 12, fallback=False)

        record = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
        assert record["query"] == "x" * 200 + "..."
        assert record["top_skill"] == "demo"
        assert record["fallback"] is False
