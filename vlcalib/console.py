"""ANSI escape sequences for coloured terminal output."""

from __future__ import annotations

_BASE_CODES: dict[str, str] = {
    # foreground
    "black": "\033[30m",
    "red": "\033[31m",
    "green": "\033[32m",
    "yellow": "\033[33m",
    "blue": "\033[34m",
    "magenta": "\033[35m",
    "cyan": "\033[36m",
    "white": "\033[37m",
    # background
    "bblack": "\033[40m",
    "bred": "\033[41m",
    "bgreen": "\033[42m",
    "byellow": "\033[43m",
    "bblue": "\033[44m",
    "bmagenta": "\033[45m",
    "bcyan": "\033[46m",
    "bwhite": "\033[47m",
    # commands
    "reset": "\033[0m",
    "bold": "\033[1m",
    "underline": "\033[4m",
    "inverse": "\034[7m",
}

_COLOR_NAMES = ("black", "red", "green", "yellow", "blue", "magenta", "cyan", "white")

STYLES: dict[str, str] = {
    **_BASE_CODES,
    **{f"bold_{name}": _BASE_CODES["bold"] + _BASE_CODES[name] for name in _COLOR_NAMES},
}

RESET = STYLES["reset"]


def colored(text: str, *args: str) -> str:
    """Wrap ``text`` in the escape sequences of the named styles, followed by a reset.

    Raises ``ValueError`` for an unknown style name.
    """
    try:
        prefix = "".join(STYLES[name] for name in args)
    except KeyError as exc:
        raise ValueError(f"unknown console style: {exc.args[0]!r}") from None
    return f"{prefix}{text}{RESET}"