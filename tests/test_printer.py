import io

import pytest

from cephctl.printer import Printer


def _capture(colorize, method, *args):
    buf = io.StringIO()
    getattr(Printer(colorize, buf), method)(*args)
    return buf.getvalue()


@pytest.mark.parametrize("method", ["green", "hi_red", "red", "yellow"])
def test_plain_colored_methods_append_newline(method):
    assert _capture(False, method, "+ %s %s %s", "mon", "test_key", "value") == (
        "+ mon test_key value\n"
    )


@pytest.mark.parametrize("method", ["green", "hi_red", "red", "yellow"])
def test_existing_newline_not_doubled(method):
    assert _capture(False, method, "x %s\n", "y") == "x y\n"


@pytest.mark.parametrize("method", ["green", "hi_red", "red", "yellow"])
def test_colorized_output_wraps_plain_text(method):
    plain = _capture(False, method, "- %s %s", "osd", "test_key")
    colored = _capture(True, method, "- %s %s", "osd", "test_key")
    assert colored.startswith("\x1b[")
    assert colored.endswith("\x1b[0m")
    assert plain in colored


def test_green_escape_code():
    assert _capture(True, "green", "ok").startswith("\x1b[32m")


def test_colors_differ_between_methods():
    outputs = {_capture(True, m, "same") for m in ["green", "hi_red", "red", "yellow"]}
    assert len(outputs) == 4


def test_printf_writes_without_newline():
    assert _capture(True, "printf", "%s:\n", "CephConfig") == "CephConfig:\n"
    assert _capture(False, "printf", "abc") == "abc"


def test_println_joins_with_spaces():
    assert _capture(True, "println", "a", 1, "b") == "a 1 b\n"


def test_default_stream_is_stdout(capsys):
    Printer(colorize=False).println("hello")
    assert capsys.readouterr().out == "hello\n"