import pytest

from vlcalib.console import STYLES, colored


def test_red_foreground():
    assert colored("x", "red") == "\033[31mx\033[0m"


def test_bold_red_is_bold_then_red():
    assert colored("err", "bold_red") == "\033[1m\033[31merr\033[0m"
    assert colored("err", "bold_red") == colored("err", "bold", "red")


def test_background_and_underline():
    assert colored("a", "bblue", "underline") == "\033[44m\033[4ma\033[0m"


def test_no_style_only_reset():
    assert colored("plain") == "plain\033[0m"


def test_every_style_is_escape_sequence():
    for name in STYLES:
        out = colored("t", name)
        assert out.endswith("t\033[0m")
        assert out.startswith(("\033[", "\034["))


def test_unknown_style_raises():
    with pytest.raises(ValueError):
        colored("x", "purple")