"""Aplicação do tema nas variáveis CSS do documento.

Todo caminho que pinta tema (página da loja, portal admin, stylesheet
renderizado no servidor) passa por ``apply_theme_to_document``. O documento
é abstraído por ``DocumentStyleSurface`` para poder ser testado sem
navegador.
"""
from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Mapping, Protocol

from digital_menu.services.color_utils import (
    ColorScheme,
    format_number,
    generate_color_scheme,
    normalize_to_hex,
)
from digital_menu.services.ui_settings import DEFAULT_UI_SETTINGS

APP_BG_VARIABLE = "--app-bg"
APP_BG_IMAGE_VARIABLE = "--app-bg-image"
AUTO_VARIABLE_PREFIX = "--auto-"
MEDIA_URL_TEMPLATE = "/api/media/{media_id}"

BACKGROUND_IMAGE_PROPERTIES: dict[str, str] = {
    "background-size": "cover",
    "background-position": "center",
    "background-repeat": "no-repeat",
    "background-attachment": "fixed",
}
BACKGROUND_IMAGE_PROPERTY_NAMES: tuple[str, ...] = ("background-image", *BACKGROUND_IMAGE_PROPERTIES)

UI_SETTINGS_VARIABLES: dict[str, str] = {
    "sectionTitleSize": "--menu-section-size",
    "categoryTitleSize": "--menu-category-size",
    "itemNameSize": "--menu-item-name-size",
    "itemDescriptionSize": "--menu-item-desc-size",
    "itemPriceSize": "--menu-item-price-size",
    "headerLogoSize": "--header-logo-size",
    "bottomNavSectionSize": "--bottom-nav-section-size",
    "bottomNavCategorySize": "--bottom-nav-category-size",
}

# A conversão por regex quebra estes dois nomes; ficam fixos.
_IRREGULAR_VARIABLE_NAMES: dict[str, str] = {
    "edgeAccent": "edge-accent",
    "lighterSurface": "lighter-surface",
}
_KEBAB_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Za-z])(?=[0-9])")


class DocumentStyleSurface(ABC):
    @abstractmethod
    def set_property(self, name: str, value: str) -> None:
        """Define uma propriedade de estilo (variável CSS ou propriedade comum)."""

    @abstractmethod
    def remove_property(self, name: str) -> None:
        """Remove a propriedade; não falha se ela não existir."""


class InlineStyleSurface(DocumentStyleSurface):
    """Superfície em memória, equivalente ao ``style`` inline de um elemento."""

    def __init__(self) -> None:
        self._properties: dict[str, str] = {}

    def set_property(self, name: str, value: str) -> None:
        self._properties[name] = value

    def remove_property(self, name: str) -> None:
        self._properties.pop(name, None)

    def get_property(self, name: str) -> str | None:
        return self._properties.get(name)

    @property
    def properties(self) -> dict[str, str]:
        return dict(self._properties)

    def to_css(self, selector: str) -> str:
        declarations = "".join(f"  {name}: {value};\n" for name, value in self._properties.items())
        return f"{selector} {{\n{declarations}}}\n"


@dataclass
class StyleDocument:
    """Elemento raiz (``<html>``) e container de conteúdo (``<body>``)."""

    root: DocumentStyleSurface
    body: DocumentStyleSurface | None = None


class ThemeLike(Protocol):
    app_bg: str
    background_image_media_id: str | None


@dataclass(frozen=True)
class ThemeSnapshot:
    app_bg: str
    background_image_media_id: str | None = None


def to_kebab_case(name: str) -> str:
    return _KEBAB_BOUNDARY.sub("-", name).lower()


def css_variable_name(role: str, prefix: str = AUTO_VARIABLE_PREFIX) -> str:
    """``textPrimary`` -> ``--auto-text-primary``."""
    return f"{prefix}{_IRREGULAR_VARIABLE_NAMES.get(role) or to_kebab_case(role)}"


def media_url(media_id: str) -> str:
    return MEDIA_URL_TEMPLATE.format(media_id=media_id)


def _surfaces(document: StyleDocument) -> list[DocumentStyleSurface]:
    return [surface for surface in (document.root, document.body) if surface is not None]


def _apply_background_image(document: StyleDocument, media_id: str | None) -> None:
    root = document.root
    if media_id:
        image_url = f"url({media_url(media_id)})"
        root.set_property(APP_BG_IMAGE_VARIABLE, image_url)
        for surface in _surfaces(document):
            surface.set_property("background-image", image_url)
            for name, value in BACKGROUND_IMAGE_PROPERTIES.items():
                surface.set_property(name, value)
        return

    root.remove_property(APP_BG_IMAGE_VARIABLE)
    for surface in _surfaces(document):
        for name in BACKGROUND_IMAGE_PROPERTY_NAMES:
            surface.remove_property(name)


def apply_palette(document: StyleDocument, scheme: ColorScheme) -> None:
    for role, value in scheme.as_dict().items():
        document.root.set_property(css_variable_name(role), value)


def apply_theme_to_document(
    document: StyleDocument | None,
    theme: ThemeLike,
    scheme: ColorScheme | None = None,
) -> ColorScheme | None:
    """Escreve ``--app-bg``, a imagem de fundo e toda a paleta ``--auto-*``.

    Sem documento (execução fora do navegador) é no-op e devolve ``None``.
    """
    if document is None or document.root is None:
        return None

    app_bg = theme.app_bg
    document.root.set_property(APP_BG_VARIABLE, app_bg)

    media_id = theme.background_image_media_id
    _apply_background_image(document, media_id)

    if scheme is None:
        scheme = generate_color_scheme(normalize_to_hex(app_bg))
    apply_palette(document, scheme)

    if document.body is not None:
        if media_id:
            document.body.remove_property("background-color")
        else:
            document.body.set_property("background-color", app_bg)

    return scheme


def apply_cached_background(document: StyleDocument | None, app_bg: str) -> ColorScheme | None:
    """Pintura antecipada a partir só da cor em cache; a imagem fica como está."""
    if document is None or document.root is None or not app_bg:
        return None
    document.root.set_property(APP_BG_VARIABLE, app_bg)
    scheme = generate_color_scheme(normalize_to_hex(app_bg))
    apply_palette(document, scheme)
    if document.body is not None:
        document.body.set_property("background-color", app_bg)
    return scheme


def _css_value(value: Any) -> str:
    if isinstance(value, float):
        return format_number(value)
    return str(value)


def apply_brand_colors(document: StyleDocument | None, brand_colors: Mapping[str, Any] | None) -> None:
    """``menuGradientStart`` -> ``--menu-gradient-start``. Independente do tema."""
    if document is None or document.root is None or not brand_colors:
        return
    for key, value in brand_colors.items():
        if value is None:
            continue
        document.root.set_property(f"--{to_kebab_case(key)}", _css_value(value))


def apply_ui_settings(document: StyleDocument | None, ui_settings: Mapping[str, Any] | None) -> None:
    if document is None or document.root is None or ui_settings is None:
        return
    for field, variable in UI_SETTINGS_VARIABLES.items():
        value = ui_settings.get(field)
        if value is None:
            value = DEFAULT_UI_SETTINGS[field]
        document.root.set_property(variable, f"{value}px")


def build_theme_stylesheet(
    theme: ThemeLike,
    *,
    brand_colors: Mapping[str, Any] | None = None,
    ui_settings: Mapping[str, Any] | None = None,
) -> str:
    """Stylesheet com o tema já resolvido, para ir no ``<head>`` antes da pintura."""
    root = InlineStyleSurface()
    body = InlineStyleSurface()
    document = StyleDocument(root=root, body=body)

    apply_theme_to_document(document, theme)
    apply_brand_colors(document, brand_colors)
    apply_ui_settings(document, ui_settings)

    return root.to_css(":root") + body.to_css("body")
