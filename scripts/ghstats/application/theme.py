from __future__ import annotations
from ghstats.domain.entities import Theme


class ThemeToggle:
    """Local light/dark switch. Owned by the presentation side, never by the fetch cycle."""

    def __init__(self, initial: Theme | str = Theme.LIGHT) -> None:
        try:
            self._theme = Theme(initial)
        except ValueError:
            raise ValueError(f"Unknown theme {initial!r}; expected 'light' or 'dark'") from None

    @property
    def current(self) -> Theme:
        return self._theme

    def toggle(self) -> Theme:
        self._theme = Theme.DARK if self._theme is Theme.LIGHT else Theme.LIGHT
        return self._theme
