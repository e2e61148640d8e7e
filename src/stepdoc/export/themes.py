"""Theme presets for HTML export."""

from dataclasses import dataclass
from enum import Enum

from ..errors import DocumentValidationError


class ThemeName(str, Enum):
    """Available color presets."""

    LIGHT = "light"
    GRAY = "gray"
    DARK = "dark"


@dataclass(frozen=True)
class ThemeColors:
    """Five-color palette applied to the exported page."""

    bg: str
    text: str
    secondary: str
    card_bg: str
    border: str


THEMES: dict[ThemeName, ThemeColors] = {
    ThemeName.LIGHT: ThemeColors("#ffffff", "#1e293b", "#64748b", "#f8fafc", "#e2e8f0"),
    ThemeName.GRAY: ThemeColors("#64748b", "#f1f5f9", "#cbd5e1", "#475569", "#334155"),
    ThemeName.DARK: ThemeColors("#0f172a", "#f1f5f9", "#94a3b8", "#1e293b", "#334155"),
}

# Accent (left border) color per style variant
VARIANT_ACCENTS: dict[str, str] = {
    "default": "",
    "info": "#1d4ed8",
    "warning": "#a16207",
    "success": "#15803d",
    "error": "#b91c1c",
}


def get_theme(theme: ThemeName | str) -> ThemeColors:
    """Look up a preset by enum member or name.

    Raises:
        DocumentValidationError: If the name is not a known preset
    """
    try:
        return THEMES[ThemeName(theme)]
    except ValueError:
        raise DocumentValidationError(f"Unknown theme: {theme}") from None
