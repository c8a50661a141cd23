"""Topic icon names and the glyphs they render as."""

from enum import Enum


class TopicIcon(str, Enum):
    """Icon names a topic may carry in its ``icon`` field."""

    SQUARE_STACK = "Square3Stack3DIcon"
    DOCUMENT_TEXT = "DocumentTextIcon"
    LINK = "LinkIcon"
    CHART_BAR = "ChartBarIcon"
    SHARE = "ShareIcon"
    CPU_CHIP = "CpuChipIcon"
    SPARKLES = "SparklesIcon"
    CURSOR_ARROW_RAYS = "CursorArrowRaysIcon"
    TROPHY = "TrophyIcon"


DEFAULT_ICON = TopicIcon.SQUARE_STACK

GLYPHS: dict[TopicIcon, str] = {
    TopicIcon.SQUARE_STACK: "\u25a6",  # ▦
    TopicIcon.DOCUMENT_TEXT: "\U0001f4c4",  # 📄
    TopicIcon.LINK: "\U0001f517",  # 🔗
    TopicIcon.CHART_BAR: "\U0001f4ca",  # 📊
    TopicIcon.SHARE: "\U0001f500",  # 🔀
    TopicIcon.CPU_CHIP: "\U0001f5a5",  # 🖥
    TopicIcon.SPARKLES: "\u2728",  # ✨
    TopicIcon.CURSOR_ARROW_RAYS: "\U0001f446",  # 👆
    TopicIcon.TROPHY: "\U0001f3c6",  # 🏆
}


def resolve_icon(name: str | None) -> str:
    """Glyph for an icon name; unknown or missing names get the default glyph."""
    try:
        icon = TopicIcon(name)
    except ValueError:
        icon = DEFAULT_ICON
    return GLYPHS[icon]
