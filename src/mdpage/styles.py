"""Style presets: fonts, palette and layout width selected by name"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class UnknownStyleError(ValueError):
    """Raised when a style name is not in the catalog."""


class StyleName(str, Enum):
    editorial = "editorial"
    minimal = "minimal"
    warm = "warm"
    mono = "mono"
    precision = "precision"
    bold = "bold"
    sophisticated = "sophisticated"


class StylePreset(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    font_import: str
    heading_font: str
    body_font: str
    bg_color: str
    text_color: str
    accent_color: str
    muted_color: str
    surface_color: str
    border_color: str
    link_color: str
    code_font: str
    code_bg: str
    blockquote_border: str
    blockquote_bg: str
    max_width: str

    @property
    def is_dark(self) -> bool:
        return self.bg_color == "#111111"

    @property
    def primary_body_font(self) -> str:
        """First family of the body font stack, unquoted."""
        return self.body_font.split(',')[0].replace("'", '').strip()


class DarkVariant(BaseModel):
    """Palette swapped in when the reader toggles dark mode."""
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    bg: str
    text: str
    accent: str
    muted: str
    surface: str
    border: str
    link: str
    code_bg: str
    bq_border: str
    bq_bg: str


_GOOGLE_FONTS = "https://fonts.googleapis.com/css2?family="

STYLES: dict[StyleName, StylePreset] = {
    StyleName.editorial: StylePreset(
        font_import=_GOOGLE_FONTS + "Playfair+Display:ital,wght@0,400;0,600;0,700;1,400;1,600"
                    "&family=Source+Serif+4:ital,opsz,wght@0,8..60,300;0,8..60,400;0,8..60,500;1,8..60,300;1,8..60,400"
                    "&family=JetBrains+Mono:wght@400;500&display=swap",
        heading_font="'Playfair Display', Georgia, serif",
        body_font="'Source Serif 4', Georgia, serif",
        bg_color="#FAFAF7", text_color="#2C2C2A", accent_color="#1A1A18", muted_color="#8A8A82",
        surface_color="#F0F0EB", border_color="#E0E0D8", link_color="#5B4A3F",
        code_font="'JetBrains Mono', monospace", code_bg="#F0F0EB",
        blockquote_border="#C8B8A8", blockquote_bg="#F5F2ED", max_width="680px",
    ),
    StyleName.minimal: StylePreset(
        font_import=_GOOGLE_FONTS + "Inter:wght@300;400;500;600;700&family=JetBrains+Mono:wght@400;500&display=swap",
        heading_font="'Inter', -apple-system, sans-serif",
        body_font="'Inter', -apple-system, sans-serif",
        bg_color="#FFFFFF", text_color="#1A1A1A", accent_color="#000000", muted_color="#999999",
        surface_color="#F5F5F5", border_color="#E5E5E5", link_color="#0066CC",
        code_font="'JetBrains Mono', monospace", code_bg="#F5F5F5",
        blockquote_border="#CCCCCC", blockquote_bg="#FAFAFA", max_width="640px",
    ),
    StyleName.warm: StylePreset(
        font_import=_GOOGLE_FONTS + "Lora:ital,wght@0,400;0,500;0,600;0,700;1,400;1,500"
                    "&family=Nunito+Sans:wght@300;400;500;600&family=JetBrains+Mono:wght@400;500&display=swap",
        heading_font="'Lora', Georgia, serif",
        body_font="'Nunito Sans', sans-serif",
        bg_color="#FBF8F3", text_color="#3D3229", accent_color="#2A1F14", muted_color="#9B8E80",
        surface_color="#F3EDE4", border_color="#E6DDD1", link_color="#8B5E3C",
        code_font="'JetBrains Mono', monospace", code_bg="#F3EDE4",
        blockquote_border="#C4A882", blockquote_bg="#F7F2EA", max_width="680px",
    ),
    StyleName.mono: StylePreset(
        font_import=_GOOGLE_FONTS + "IBM+Plex+Mono:ital,wght@0,300;0,400;0,500;0,600;1,400"
                    "&family=IBM+Plex+Sans:wght@300;400;500;600&display=swap",
        heading_font="'IBM Plex Mono', monospace",
        body_font="'IBM Plex Sans', sans-serif",
        bg_color="#111111", text_color="#E0E0E0", accent_color="#FFFFFF", muted_color="#777777",
        surface_color="#1A1A1A", border_color="#333333", link_color="#80CBC4",
        code_font="'IBM Plex Mono', monospace", code_bg="#1A1A1A",
        blockquote_border="#444444", blockquote_bg="#1A1A1A", max_width="700px",
    ),
    StyleName.precision: StylePreset(
        font_import=_GOOGLE_FONTS + "JetBrains+Mono:wght@400;500&display=swap",
        heading_font="system-ui, -apple-system, 'Segoe UI', sans-serif",
        body_font="system-ui, -apple-system, 'Segoe UI', sans-serif",
        bg_color="#FFFFFF", text_color="#1e293b", accent_color="#0f172a", muted_color="#94a3b8",
        surface_color="#f8fafc", border_color="rgba(0,0,0,0.08)", link_color="#2563eb",
        code_font="'JetBrains Mono', 'SF Mono', Consolas, monospace", code_bg="#f1f5f9",
        blockquote_border="#2563eb", blockquote_bg="#f8fafc", max_width="660px",
    ),
    StyleName.bold: StylePreset(
        font_import=_GOOGLE_FONTS + "Space+Grotesk:wght@400;500;600;700&family=JetBrains+Mono:wght@400;500&display=swap",
        heading_font="'Space Grotesk', system-ui, sans-serif",
        body_font="'Space Grotesk', system-ui, sans-serif",
        bg_color="#FAFAFA", text_color="#18181B", accent_color="#09090B", muted_color="#71717A",
        surface_color="#F4F4F5", border_color="#E4E4E7", link_color="#DC2626",
        code_font="'JetBrains Mono', monospace", code_bg="#F4F4F5",
        blockquote_border="#DC2626", blockquote_bg="#FEF2F2", max_width="720px",
    ),
    StyleName.sophisticated: StylePreset(
        font_import=_GOOGLE_FONTS + "DM+Sans:ital,wght@0,400;0,500;0,600;0,700;1,400"
                    "&family=DM+Serif+Display&family=JetBrains+Mono:wght@400;500&display=swap",
        heading_font="'DM Serif Display', Georgia, serif",
        body_font="'DM Sans', sans-serif",
        bg_color="#FAFBFC", text_color="#1F2937", accent_color="#111827", muted_color="#6B7280",
        surface_color="#F3F4F6", border_color="#E5E7EB", link_color="#4F46E5",
        code_font="'JetBrains Mono', monospace", code_bg="#F3F4F6",
        blockquote_border="#4F46E5", blockquote_bg="#F5F3FF", max_width="680px",
    ),
}

DARK_VARIANTS: dict[StyleName, DarkVariant] = {
    StyleName.editorial: DarkVariant(
        bg="#1A1918", text="#E0DDD8", accent="#F5F2ED", muted="#8A8A82", surface="#252420",
        border="#3A3832", link="#C4A882", code_bg="#252420", bq_border="#5A4A3A", bq_bg="#252420"),
    StyleName.minimal: DarkVariant(
        bg="#111111", text="#E0E0E0", accent="#FFFFFF", muted="#888888", surface="#1A1A1A",
        border="#333333", link="#5C9CE6", code_bg="#1A1A1A", bq_border="#555555", bq_bg="#1A1A1A"),
    StyleName.warm: DarkVariant(
        bg="#1F1A14", text="#E0D8CE", accent="#F5EDE4", muted="#9B8E80", surface="#2A231A",
        border="#3D3229", link="#C4A882", code_bg="#2A231A", bq_border="#5A4A3A", bq_bg="#2A231A"),
    StyleName.mono: DarkVariant(
        bg="#FAFAF7", text="#2C2C2A", accent="#1A1A18", muted="#8A8A82", surface="#F0F0EB",
        border="#E0E0D8", link="#5B4A3F", code_bg="#F0F0EB", bq_border="#C8B8A8", bq_bg="#F5F2ED"),
    StyleName.precision: DarkVariant(
        bg="#0F172A", text="#E2E8F0", accent="#F8FAFC", muted="#94A3B8", surface="#1E293B",
        border="#334155", link="#60A5FA", code_bg="#1E293B", bq_border="#3B82F6", bq_bg="#1E293B"),
    StyleName.bold: DarkVariant(
        bg="#18181B", text="#E4E4E7", accent="#FAFAFA", muted="#A1A1AA", surface="#27272A",
        border="#3F3F46", link="#F87171", code_bg="#27272A", bq_border="#EF4444", bq_bg="#27272A"),
    StyleName.sophisticated: DarkVariant(
        bg="#111827", text="#E5E7EB", accent="#F9FAFB", muted="#9CA3AF", surface="#1F2937",
        border="#374151", link="#818CF8", code_bg="#1F2937", bq_border="#6366F1", bq_bg="#1F2937"),
}

STYLE_LABELS: dict[StyleName, str] = {name: name.value.capitalize() for name in StyleName}

STYLE_DESCRIPTIONS: dict[StyleName, str] = {
    StyleName.editorial: "Serif typography, warm off-white, magazine feel (default)",
    StyleName.minimal: "Clean sans-serif, white background, Swiss design",
    StyleName.warm: "Serif headings + sans body, cream tones, cozy",
    StyleName.mono: "Monospace headings, dark background, techy",
    StyleName.precision: "System UI, cool slate, borders-only, technical",
    StyleName.bold: "Space Grotesk, high contrast, red accents, dramatic",
    StyleName.sophisticated: "DM Serif Display + DM Sans, indigo accents, premium",
}


def style_names() -> list[str]:
    return [name.value for name in StyleName]


def resolve_style(name: str, accent: Optional[str] = None) -> StylePreset:
    """Look up a preset by name; an accent override replaces link and blockquote border colours."""
    try:
        preset = STYLES[StyleName(name)]
    except ValueError:
        raise UnknownStyleError(
            f'Unknown style "{name}". Available: {", ".join(style_names())}'
        ) from None
    if accent:
        return preset.model_copy(update={"link_color": accent, "blockquote_border": accent})
    return preset
