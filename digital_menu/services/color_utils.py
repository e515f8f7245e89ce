"""Derivação automática de cores a partir da cor de fundo do tema.

Tudo aqui é puro: nenhuma função faz I/O nem levanta exceção por causa de
uma cor malformada. Entradas inválidas caem em valores de fallback
documentados (``None``, luminância 0.5, ``#000000`` ou a paleta padrão).

A aritmética é feita direto nos canais sRGB, sem correção perceptual.
"""
from __future__ import annotations

import colorsys
import math
import re
from dataclasses import dataclass, fields
from typing import NamedTuple

HEX_COLOR_PATTERN = re.compile(r"^#?([0-9a-fA-F]{2})([0-9a-fA-F]{2})([0-9a-fA-F]{2})$")
RGBA_PATTERN = re.compile(r"rgba?\((\d+),\s*(\d+),\s*(\d+)(?:,\s*([\d.]+))?\)")
HSLA_PATTERN = re.compile(
    r"hsla?\(\s*(-?[\d.]+)(?:deg)?\s*,\s*([\d.]+)%\s*,\s*([\d.]+)%\s*(?:,\s*[\d.]+%?\s*)?\)",
    re.IGNORECASE,
)

DEFAULT_BACKGROUND_COLOR = "#400810"
FALLBACK_HEX = "#000000"
FIXED_ACCENT = "#FBBF24"
FALLBACK_PRIMARY = "#800020"
FALLBACK_PRIMARY_HOVER = "#A00028"
LIGHT_LUMINANCE_THRESHOLD = 0.5
NEUTRAL_LUMINANCE = 0.5

_FALLBACK_RGB = (64, 8, 16)


class RGB(NamedTuple):
    r: int
    g: int
    b: int


def format_number(value: float) -> str:
    # Mesmo formato que o navegador imprime: 1 e não 1.0
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


def _rgba(r: int, g: int, b: int, alpha: float) -> str:
    return f"rgba({r}, {g}, {b}, {format_number(alpha)})"


def _clamp_channel(value: float) -> int:
    # Arredonda meio para cima, como Math.round
    return max(0, min(255, int(math.floor(value + 0.5))))


def hex_to_rgb(hex_color: str) -> RGB | None:
    """``#RRGGBB`` (``#`` opcional) -> RGB. Qualquer outra coisa devolve ``None``."""
    if not isinstance(hex_color, str):
        return None
    match = HEX_COLOR_PATTERN.fullmatch(hex_color)
    if not match:
        return None
    return RGB(*(int(part, 16) for part in match.groups()))


def rgb_to_hex(r: float, g: float, b: float) -> str:
    return "#" + "".join(f"{_clamp_channel(channel):02X}" for channel in (r, g, b))


def _linearize(channel: int) -> float:
    value = channel / 255
    if value <= 0.03928:
        return value / 12.92
    return ((value + 0.055) / 1.055) ** 2.4


def relative_luminance(hex_color: str) -> float:
    """Luminância relativa (fórmula WCAG), usada só para decidir claro/escuro."""
    rgb = hex_to_rgb(hex_color)
    if rgb is None:
        return NEUTRAL_LUMINANCE

    r, g, b = (_linearize(channel) for channel in rgb)
    return 0.2126 * r + 0.7152 * g + 0.0722 * b


def is_light_color(hex_color: str) -> bool:
    return relative_luminance(hex_color) > LIGHT_LUMINANCE_THRESHOLD


def adjust_brightness(hex_color: str, amount: float) -> str:
    """Soma ``amount`` em cada canal, com clamp em [0, 255].

    Cor inválida volta sem alteração.
    """
    rgb = hex_to_rgb(hex_color)
    if rgb is None:
        return hex_color
    return rgb_to_hex(rgb.r + amount, rgb.g + amount, rgb.b + amount)


def normalize_to_hex(color: str) -> str:
    """Converte ``rgb()``, ``rgba()``, ``hsl()`` ou ``hsla()`` para ``#RRGGBB``.

    Strings que já começam com ``#`` voltam intactas. O alfa é descartado.
    Qualquer outra entrada vira ``#000000``.
    """
    if not isinstance(color, str):
        return FALLBACK_HEX
    if color.startswith("#"):
        return color

    rgba_match = RGBA_PATTERN.search(color)
    if rgba_match:
        r, g, b = (int(part, 10) for part in rgba_match.groups()[:3])
        return rgb_to_hex(r, g, b)

    hsla_match = HSLA_PATTERN.search(color)
    if hsla_match:
        hue, saturation, lightness = (float(part) for part in hsla_match.groups())
        r, g, b = colorsys.hls_to_rgb(
            (hue % 360) / 360,
            min(lightness, 100.0) / 100,
            min(saturation, 100.0) / 100,
        )
        return rgb_to_hex(r * 255, g * 255, b * 255)

    return FALLBACK_HEX


def glow_color(background_color: str, opacity: float = 0.35) -> str:
    rgb = hex_to_rgb(background_color)
    if rgb is None:
        return _rgba(*_FALLBACK_RGB, opacity)
    return _rgba(rgb.r, rgb.g, rgb.b, opacity)


def edge_accent_color(background_color: str, opacity: float = 0.4) -> str:
    """Acentos triangulares laterais dos quadros, sempre no tom do fundo."""
    rgb = hex_to_rgb(background_color)
    if rgb is None:
        return _rgba(*_FALLBACK_RGB, opacity)
    return _rgba(rgb.r, rgb.g, rgb.b, opacity)


def lighter_surface(background_color: str, opacity: float = 0.9) -> str:
    """Superfície de botões.

    Em fundo claro devolve preto translúcido (mais escuro, apesar do nome);
    em fundo escuro soma 20 em cada canal.
    """
    rgb = hex_to_rgb(background_color)
    if rgb is None:
        return _rgba(*_FALLBACK_RGB, opacity)

    if is_light_color(background_color):
        return _rgba(0, 0, 0, opacity * 0.3)

    return _rgba(
        min(255, rgb.r + 20),
        min(255, rgb.g + 20),
        min(255, rgb.b + 20),
        opacity,
    )


def _to_camel(name: str) -> str:
    head, *tail = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in tail)


@dataclass(frozen=True)
class ColorScheme:
    text_primary: str
    text_secondary: str
    surface_bg: str
    surface_bg_2: str
    border: str
    primary: str
    primary_hover: str
    primary_text: str
    accent: str
    muted: str
    shadow_color: str
    shadow_color_light: str
    primary_glow: str
    primary_glow_strong: str
    primary_glow_subtle: str
    edge_accent: str
    lighter_surface: str

    def as_dict(self) -> dict[str, str]:
        """Papéis em camelCase (``textPrimary``...), na ordem de declaração."""
        return {_to_camel(field.name): getattr(self, field.name) for field in fields(self)}


PALETTE_ROLES: tuple[str, ...] = tuple(_to_camel(field.name) for field in fields(ColorScheme))


def _build_fallback_scheme() -> ColorScheme:
    return ColorScheme(
        text_primary="#FFFFFF",
        text_secondary="rgba(255, 255, 255, 0.9)",
        surface_bg="rgba(255, 255, 255, 0.1)",
        surface_bg_2="rgba(255, 255, 255, 0.05)",
        border="rgba(255, 255, 255, 0.2)",
        primary=FALLBACK_PRIMARY,
        primary_hover=FALLBACK_PRIMARY_HOVER,
        primary_text="#FFFFFF",
        accent=FIXED_ACCENT,
        muted="rgba(255, 255, 255, 0.5)",
        shadow_color="rgba(0, 0, 0, 0.3)",
        shadow_color_light="rgba(0, 0, 0, 0.1)",
        primary_glow=glow_color(DEFAULT_BACKGROUND_COLOR, 0.35),
        primary_glow_strong=glow_color(DEFAULT_BACKGROUND_COLOR, 0.45),
        primary_glow_subtle=glow_color(DEFAULT_BACKGROUND_COLOR, 0.25),
        edge_accent=edge_accent_color(DEFAULT_BACKGROUND_COLOR, 0.4),
        lighter_surface=lighter_surface(DEFAULT_BACKGROUND_COLOR, 0.9),
    )


FALLBACK_COLOR_SCHEME = _build_fallback_scheme()


def _light_scheme(background_color: str, rgb: RGB, lightness: float) -> ColorScheme:
    # Fundo claro: texto preto e superfícies escurecidas, mais fortes quanto mais claro o fundo
    surface_opacity = min(0.25, 0.1 + lightness * 0.15)
    surface_2_opacity = min(0.15, 0.05 + lightness * 0.1)
    border_opacity = min(0.4, 0.2 + lightness * 0.2)
    shadow = [max(0, channel - 80) for channel in rgb]

    return ColorScheme(
        text_primary="#000000",
        text_secondary="rgba(0, 0, 0, 0.8)",
        surface_bg=_rgba(0, 0, 0, surface_opacity),
        surface_bg_2=_rgba(0, 0, 0, surface_2_opacity),
        border=_rgba(0, 0, 0, border_opacity),
        primary=adjust_brightness(background_color, -60),
        primary_hover=adjust_brightness(background_color, -80),
        primary_text="#FFFFFF",
        accent=adjust_brightness(background_color, -50),
        muted="rgba(0, 0, 0, 0.6)",
        shadow_color=_rgba(*shadow, 0.5),
        shadow_color_light=_rgba(*shadow, 0.3),
        primary_glow=glow_color(background_color, 0.2),
        primary_glow_strong=glow_color(background_color, 0.3),
        primary_glow_subtle=glow_color(background_color, 0.15),
        edge_accent=edge_accent_color(background_color, 0.3),
        lighter_surface=_rgba(0, 0, 0, min(0.3, surface_opacity + 0.1)),
    )


def _dark_scheme(background_color: str, rgb: RGB, lightness: float) -> ColorScheme:
    darkness = 1 - lightness
    shadow = [max(0, channel - 30) for channel in rgb]

    return ColorScheme(
        text_primary="#FFFFFF",
        text_secondary="rgba(255, 255, 255, 0.9)",
        surface_bg=_rgba(255, 255, 255, min(0.2, 0.1 + darkness * 0.1)),
        surface_bg_2=_rgba(255, 255, 255, min(0.15, 0.05 + darkness * 0.05)),
        border=_rgba(255, 255, 255, min(0.3, 0.2 + darkness * 0.1)),
        primary=adjust_brightness(background_color, min(60, 30 + darkness * 30)),
        primary_hover=adjust_brightness(background_color, min(80, 50 + darkness * 30)),
        primary_text="#FFFFFF",
        accent=FIXED_ACCENT,
        muted=_rgba(255, 255, 255, min(0.7, 0.5 + darkness * 0.2)),
        shadow_color=_rgba(*shadow, 0.5),
        shadow_color_light=_rgba(*shadow, 0.3),
        primary_glow=glow_color(background_color, 0.35),
        primary_glow_strong=glow_color(background_color, 0.45),
        primary_glow_subtle=glow_color(background_color, 0.25),
        edge_accent=edge_accent_color(background_color, 0.4),
        lighter_surface=lighter_surface(background_color, 0.9),
    )


def generate_color_scheme(background_color: str) -> ColorScheme:
    """Paleta completa derivada de uma única cor de fundo hex.

    Função pura: a mesma entrada sempre gera a mesma saída, então o resultado
    pode ser cacheado pela string hex. Cor que não parseia devolve
    ``FALLBACK_COLOR_SCHEME``.
    """
    rgb = hex_to_rgb(background_color)
    if rgb is None:
        return FALLBACK_COLOR_SCHEME

    lightness = relative_luminance(background_color)
    if lightness > LIGHT_LUMINANCE_THRESHOLD:
        return _light_scheme(background_color, rgb, lightness)
    return _dark_scheme(background_color, rgb, lightness)
