from arbor.logging_utils import parse_log_filter


def test_default_level(monkeypatch) -> None:
    monkeypatch.delenv("ARBOR_LOG_FILTER", raising=False)
    assert parse_log_filter() == ("warning", {})


def test_module_levels() -> None:
    level, filters = parse_log_filter("debug, arbor.eval=trace, arbor.surface=false")
    assert level == "debug"
    assert filters == {"arbor.eval": "TRACE", "arbor.surface": False}


def test_reads_environment(monkeypatch) -> None:
    monkeypatch.setenv("ARBOR_LOG_FILTER", "INFO")
    assert parse_log_filter() == ("info", {})
