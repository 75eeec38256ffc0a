import pytest

from ccstatus import status
from ccstatus.config import WidgetItem, default_settings
from ccstatus.status import ContextWindow, CurrentUsage, Session
from ccstatus.widgets.base import RenderContext
from ccstatus.widgets.metrics import (
    ContextLengthWidget,
    ContextPercentageUsableWidget,
    PercentageWidget,
    TokenWidget,
    extract_cache_creation_tokens,
    extract_cached_tokens,
    extract_current_input_tokens,
    extract_current_output_tokens,
    extract_input_tokens,
    extract_output_tokens,
    extract_total_tokens,
)

SETTINGS = default_settings()

TOKENS_INPUT = TokenWidget(extract_input_tokens, "Input Tokens", "Total input token count", default_prefix="In: ")
TOKENS_OUTPUT = TokenWidget(extract_output_tokens, "Output Tokens", "Total output token count", default_prefix="Out: ")
TOKENS_CACHED = TokenWidget(extract_cached_tokens, "Cached Tokens", "Cached token count", default_prefix="Cached: ")
TOKENS_TOTAL = TokenWidget(extract_total_tokens, "Total Tokens", "Total token count", default_prefix="Total: ")
CUR_IN = TokenWidget(extract_current_input_tokens, "Current Input Tokens", "in", default_prefix="CurIn: ")
CUR_OUT = TokenWidget(extract_current_output_tokens, "Current Output Tokens", "out", default_prefix="CurOut: ")
CACHE_CREATION = TokenWidget(extract_cache_creation_tokens, "Cache Creation Tokens", "cw", default_prefix="CacheW: ")
CONTEXT_PCT = PercentageWidget(status.context_percentage, "Context %", "usage", default_prefix="Ctx: ")
REMAINING_PCT = PercentageWidget(status.remaining_percentage, "Remaining %", "rem", default_prefix="Rem: ")
CACHE_HIT = PercentageWidget(
    status.cache_hit_rate, "Cache Hit Rate", "hits", default_prefix="Cache: ", default_color="cyan"
)


def render(widget, data, **item_fields):
    return widget.render(WidgetItem(**item_fields), RenderContext(data=data), SETTINGS)


def usage(**kw):
    return Session(context_window=ContextWindow(current_usage=CurrentUsage(**kw)))


def test_tokens_input_formats():
    data = Session(context_window=ContextWindow(total_input_tokens=50_000))
    assert render(TOKENS_INPUT, data) == "50.0k"
    assert TOKENS_INPUT.default_color == "white"
    assert TOKENS_INPUT.default_prefix == "In: "


def test_tokens_input_missing():
    assert render(TOKENS_INPUT, Session()) == ""
    assert render(TOKENS_INPUT, None) == ""


def test_tokens_output():
    data = Session(context_window=ContextWindow(total_output_tokens=1_200_000))
    assert render(TOKENS_OUTPUT, data) == "1.2M"
    assert render(TOKENS_OUTPUT, Session()) == ""


def test_tokens_cached():
    assert render(TOKENS_CACHED, usage(cache_read_input_tokens=8000)) == "8.0k"
    assert render(TOKENS_CACHED, usage(cache_read_input_tokens=0)) == ""
    assert render(TOKENS_CACHED, Session(context_window=ContextWindow())) == ""


def test_tokens_total():
    both = Session(context_window=ContextWindow(total_input_tokens=30_000, total_output_tokens=20_000))
    assert render(TOKENS_TOTAL, both) == "50.0k"
    only_in = Session(context_window=ContextWindow(total_input_tokens=500))
    assert render(TOKENS_TOTAL, only_in) == "500"
    zeros = Session(context_window=ContextWindow(total_input_tokens=0, total_output_tokens=0))
    assert render(TOKENS_TOTAL, zeros) == ""


def test_current_usage_widgets():
    assert render(CUR_IN, usage(input_tokens=8500)) == "8.5k"
    assert render(CUR_IN, Session(context_window=ContextWindow())) == ""
    assert render(CUR_IN, None) == ""
    assert render(CUR_OUT, usage(output_tokens=1200)) == "1.2k"
    assert render(CUR_OUT, usage(output_tokens=0)) == ""
    assert render(CACHE_CREATION, usage(cache_creation_input_tokens=5000)) == "5.0k"
    assert render(CACHE_CREATION, usage(cache_creation_input_tokens=0)) == ""
    assert render(CACHE_CREATION, Session()) == ""


def test_extractors():
    assert extract_input_tokens(Session()) is None
    assert extract_output_tokens(Session(context_window=ContextWindow(total_output_tokens=7))) == 7
    assert extract_total_tokens(Session()) is None
    assert extract_total_tokens(Session(context_window=ContextWindow())) == 0
    assert extract_cached_tokens(Session(context_window=ContextWindow())) is None
    assert extract_current_input_tokens(usage(input_tokens=3)) == 3


def test_context_length_widget():
    w = ContextLengthWidget()
    data = usage(input_tokens=40_000, cache_creation_input_tokens=5000, cache_read_input_tokens=5000)
    assert render(w, data) == "50.0k"
    assert render(w, usage()) == ""
    assert render(w, None) == ""
    assert w.default_color == "white"


@pytest.mark.parametrize(
    "pct, raw, expected",
    [(25.7, False, "26%"), (25.7, True, "25.7"), (0.0, False, "0%")],
)
def test_context_percentage_widget(pct, raw, expected):
    data = Session(context_window=ContextWindow(used_percentage=pct))
    assert render(CONTEXT_PCT, data, raw_value=raw) == expected


def test_context_percentage_no_data():
    assert render(CONTEXT_PCT, Session()) == ""
    assert CONTEXT_PCT.supports_raw_value is True


def test_remaining_percentage_widget():
    data = Session(context_window=ContextWindow(remaining_percentage=74.3))
    assert render(REMAINING_PCT, data) == "74%"
    assert render(REMAINING_PCT, data, raw_value=True) == "74.3"
    assert render(REMAINING_PCT, Session()) == ""
    assert render(REMAINING_PCT, Session(context_window=ContextWindow(remaining_percentage=0.0))) == "0%"
    assert render(REMAINING_PCT, None) == ""
    assert REMAINING_PCT.default_color == "white"


def test_cache_hit_rate_widget():
    high = usage(input_tokens=2000, cache_creation_input_tokens=1000, cache_read_input_tokens=7000)
    assert render(CACHE_HIT, high) == "70%"
    none = usage(input_tokens=5000, cache_creation_input_tokens=3000, cache_read_input_tokens=0)
    assert render(CACHE_HIT, none) == "0%"
    assert render(CACHE_HIT, Session()) == ""
    assert render(CACHE_HIT, None) == ""
    assert CACHE_HIT.default_color == "cyan"


def _usable_data(input_tokens):
    return Session(
        context_window=ContextWindow(
            context_window_size=200_000, current_usage=CurrentUsage(input_tokens=input_tokens)
        )
    )


def test_context_percentage_usable_widget():
    w = ContextPercentageUsableWidget()
    assert render(w, _usable_data(80_000)) == "50%"
    assert render(w, _usable_data(80_000), raw_value=True) == "50.0"
    assert render(w, _usable_data(200_000)) == "100%"
    assert render(w, None) == ""
    assert w.supports_raw_value is True