from typing import Optional

from rich.console import RenderableType
from rich.markup import escape
from rich.panel import Panel

from clangd_cdb.tui.enums import SectionStyle, UIStyle


def styled(text: str, style: str) -> str:
    return f"[{style}]{text}[/{style}]"


class UISection:
    @staticmethod
    def wrap(title: str, body: RenderableType, style: SectionStyle, subtitle: Optional[str] = None) -> Panel:
        return Panel(body, title=title, subtitle=subtitle, border_style=style.value, padding=(0, 1))

    @staticmethod
    def message(title: str, text: str, style: SectionStyle, hint: Optional[str] = None) -> Panel:
        """Panel holding plain text; ``text`` and ``hint`` are escaped."""
        body = escape(text)
        if hint:
            body = f"{body}\n{styled(escape(hint), UIStyle.DIM.value)}"
        return Panel(body, title=title, border_style=style.value, padding=(0, 1))
