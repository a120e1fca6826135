"""Unit tests for RenderConfig."""

import pytest
from pydantic import ValidationError

from span_report.config import RenderConfig


def test_defaults() -> None:
    config = RenderConfig()
    assert config.tab_width == 4
    assert config.context_lines == 0
    assert config.elision_threshold == 3
    assert config.lines_before == 0
    assert config.max_width == 100
    assert config.lines_after == 0


def test_start_and_end_context_override_context_lines() -> None:
    config = RenderConfig(context_lines=2, start_context_lines=1)
    assert config.lines_before == 1
    assert config.lines_after == 2


@pytest.mark.parametrize(
    "values",
    [
        {"tab_width": 0},
        {"context_lines": -1},
        {"elision_threshold": -2},
        {"end_context_lines": -1},
        {"max_width": 0},
    ],
    ids=["tab-width", "context", "elision", "end-context", "max-width"],
)
def test_rejects_out_of_range_values(values: dict[str, int]) -> None:
    with pytest.raises(ValidationError):
        RenderConfig(**values)


class TestFromEnv:
    """Tests for reading SPAN_REPORT_* variables."""

    def test_reads_prefixed_variables(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SPAN_REPORT_TAB_WIDTH", "8")
        monkeypatch.setenv("SPAN_REPORT_CONTEXT_LINES", "2")
        monkeypatch.setenv("SPAN_REPORT_END_CONTEXT_LINES", "0")
        config = RenderConfig.from_env()
        assert config.tab_width == 8
        assert config.lines_before == 2
        assert config.lines_after == 0

    def test_blank_values_fall_back_to_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SPAN_REPORT_TAB_WIDTH", "  ")
        monkeypatch.delenv("SPAN_REPORT_ELISION_THRESHOLD", raising=False)
        config = RenderConfig.from_env()
        assert config.tab_width == 4
        assert config.elision_threshold == 3

    def test_invalid_value_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SPAN_REPORT_TAB_WIDTH", "zero")
        with pytest.raises(ValidationError):
            RenderConfig.from_env()
