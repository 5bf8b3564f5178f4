"""
Terminal rendering for command output.

Output is markdown with two additions: ~word~ marks something the user can
type next, and a line holding a lone "#" is a section break.
"""

import io
import re

from prompt_toolkit.styles import Style as PTStyle
from rich.console import Console, Group
from rich.markdown import Markdown
from rich.rule import Rule

# Shared console instance
console = Console()

# -----------------------------------------------------------------------------
# Theme
# -----------------------------------------------------------------------------

THEME = {
    "primary": "steel_blue",
    "error": "dark_red",
    "rule": "grey50",
    "dim": "dim",
}

pt_style = PTStyle.from_dict({
    "completion-menu.completion": "bg:#1e3a5f #c0c0c0",
    "completion-menu.completion.current": "bg:#3a6a9f #ffffff bold",
    "completion-menu.meta.completion": "bg:#1e3a5f #808080",
    "completion-menu.meta.completion.current": "bg:#3a6a9f #c0c0c0",
})

_SHORTCUT_RE = re.compile(r"~([^~\n]+)~")


# -----------------------------------------------------------------------------
# Rendering
# -----------------------------------------------------------------------------

def highlight_shortcuts(text: str) -> str:
    """Turn ~word~ into bold markdown."""
    return _SHORTCUT_RE.sub(r"**\1**", text)


def split_sections(text: str) -> list[str]:
    sections = [[]]
    for line in text.split("\n"):
        if line.strip() == "#":
            sections.append([])
        else:
            sections[-1].append(line)
    return ["\n".join(lines).strip() for lines in sections]


def build_renderable(output: str) -> Group:
    parts = []
    for i, section in enumerate(split_sections(output)):
        if i:
            parts.append(Rule(style=THEME["rule"]))
        if not section:
            continue
        if section.startswith("! "):
            parts.append(Markdown(highlight_shortcuts(section[2:]), style=THEME["error"]))
        else:
            parts.append(Markdown(highlight_shortcuts(section)))
    return Group(*parts)


def render_output(output: str) -> None:
    console.print(build_renderable(output))
    console.print()


def render_to_text(output: str, width: int = 80) -> str:
    """Render output as plain terminal text."""
    buffer = io.StringIO()
    Console(file=buffer, width=width, no_color=True).print(build_renderable(output))
    return buffer.getvalue()
