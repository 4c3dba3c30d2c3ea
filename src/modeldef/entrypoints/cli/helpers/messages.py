"""Terminal message helpers for the modeldef CLI.

Small helpers for rendering user-visible lines with emoji→ASCII fallbacks.
Messages write to stderr so stdout can remain machine-readable.
"""

import click


def _supports_character(character: str) -> bool:
    """Return True if *character* can be encoded on stderr.

    Args:
        character: A single Unicode character to test (e.g., "✅").

    Returns:
        bool: True if encoding succeeds; False on `UnicodeEncodeError`.
    """

    stream = click.get_text_stream("stderr")  # pragma: no mutate
    encoding = getattr(stream, "encoding", None) or "ascii"
    try:
        character.encode(encoding)
    except UnicodeEncodeError:
        return False
    return True


def success_glyph() -> str:
    """Success marker: "✅" when stderr can encode it, otherwise "[OK]"."""
    emoji, fallback = ("✅", "[OK]")  # pragma: no mutate
    if _supports_character(emoji):
        return emoji
    return fallback


def success(msg: str) -> None:
    """Emit a green, bold success line to **stderr** with a success glyph.

    Args:
        msg: The message to display.

    Example:
        ``✅  Wrote spec for Order to tests/specs/order.py``
    """
    g = success_glyph()
    click.secho(f"{g}  {msg}", fg="green", bold=True, err=True)
