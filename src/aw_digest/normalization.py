"""Turn window focus payloads into stable application titles."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

_MODIFIED_MARKER = "● "


@dataclass(frozen=True, slots=True)
class TitleRule:
    """How to derive a title for one known application."""

    display_name: str
    suffix: str
    strip_modified_marker: bool = False
    bare_when_empty: bool = False

    def apply(self, window_title: str) -> str:
        text = window_title
        if self.strip_modified_marker and text.startswith(_MODIFIED_MARKER):
            text = text[len(_MODIFIED_MARKER):]
        if text.endswith(self.suffix):
            text = text[: -len(self.suffix)]
        if not text and self.bare_when_empty:
            return self.display_name
        return f"{self.display_name}: {text}"


# Keyed by the watcher's exact ``app`` value.
TITLE_RULES: dict[str, TitleRule] = {
    "firefox": TitleRule("Firefox", " — Mozilla Firefox", bare_when_empty=True),
    "VSCodium": TitleRule("VSCodium", " - VSCodium", strip_modified_marker=True),
}


def make_title(
    payload: Mapping[str, Any], rules: Optional[Mapping[str, TitleRule]] = None
) -> str:
    """Return the normalized application title for a focus event payload."""
    app = str(payload.get("app") or "")
    window_title = str(payload.get("title") or "")
    rule = (TITLE_RULES if rules is None else rules).get(app)
    if rule is None:
        return f"{app}: {window_title}"
    return rule.apply(window_title)
