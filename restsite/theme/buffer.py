"""HTML output buffer with separate raw and escaped write paths."""

from __future__ import annotations

import html


class HtmlBuffer:
    """Collects rendered markup.

    ``raw()`` writes trusted markup unchanged; ``text()`` escapes it first.
    Editor-entered field values reach ``raw()`` only through
    ``render_field_raw``, so the trust boundary stays greppable.
    """

    def __init__(self) -> None:
        self._parts: list[str] = []

    def raw(self, markup: str) -> None:
        self._parts.append(markup)

    def text(self, value: str) -> None:
        self._parts.append(html.escape(value))

    def getvalue(self) -> str:
        return "".join(self._parts)

    def __str__(self) -> str:
        return self.getvalue()
