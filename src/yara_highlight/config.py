"""Theme loader for highlight styles.

Loads the category-to-style table from YAML files with priority resolution:
1. User config: ~/.config/{app_name}/themes/ (highest priority)
2. Project config: .{app_name}/themes/ in current directory
3. Package defaults: shipped with yara-highlight (fallback)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from pathlib import Path

from .errors import ThemeNotFoundError
from .tokens import Category

logger = logging.getLogger(__name__)

# Lazy import yaml to avoid startup cost
_yaml = None


def _get_yaml():
    """Lazy-load PyYAML."""
    global _yaml
    if _yaml is None:
        import yaml

        _yaml = yaml
    return _yaml


def _get_package_defaults_path() -> Path:
    """Get path to package default themes using importlib.resources."""
    try:
        from importlib.resources import files

        return files("yara_highlight.theme_data") / "_defaults"
    except (ImportError, TypeError):
        # Source checkouts where the package is not importable by name
        return Path(__file__).parent / "theme_data" / "_defaults"


@dataclass(frozen=True)
class Style:
    """Visual style for one category."""

    css_class: str
    color: str | None = None
    """Hex color, e.g. ``#0000ff``."""

    bold: bool = False
    italic: bool = False


DEFAULT_STYLES: dict[Category, Style] = {
    Category.KEYWORD: Style("cm-keyword", "#0033b3", bold=True),
    Category.STRING: Style("cm-string", "#067d17"),
    Category.COMMENT: Style("cm-comment", "#8c8c8c", italic=True),
    Category.NUMBER: Style("cm-number", "#c41a16"),
    Category.META: Style("cm-meta", "#871094"),
    Category.VARIABLE: Style("cm-variableName", "#1750eb"),
    Category.RULE_NAME: Style("cm-def", "#00627a", bold=True),
    Category.OPERATOR: Style("cm-operator", "#5f6368"),
    Category.ATOM: Style("cm-atom", "#b05a00"),
}

_STYLE_TYPES: dict[str, tuple[type, ...]] = {
    "css_class": (str,),
    "color": (str, type(None)),
    "bold": (bool,),
    "italic": (bool,),
}


class ThemeConfig:
    """Load a named theme with priority resolution.

    Config locations are checked in priority order:
    1. ~/.config/{app_name}/themes/ - User overrides
    2. .{app_name}/themes/ - Project-specific themes
    3. Package defaults - Shipped with yara-highlight

    The first file found wins. Categories the file does not mention keep
    their entry from :data:`DEFAULT_STYLES`.
    """

    def __init__(self, theme: str = "default", app_name: str = "yara-highlight"):
        """Initialize and load the theme.

        Args:
            theme: Theme name; resolves to ``{theme}.yaml``.
            app_name: Application name for config directory resolution.

        Raises:
            ThemeNotFoundError: If no location provides the theme.
        """
        self.theme = theme
        self._app_name = app_name
        self._config_locations = [
            Path.home() / ".config" / app_name / "themes",  # User overrides
            Path.cwd() / f".{app_name}" / "themes",  # Project config
        ]
        self._styles: dict[Category, Style] = dict(DEFAULT_STYLES)
        self.source: Path | None = None

        config_file = self._find_config_file(theme)
        if config_file is None:
            raise ThemeNotFoundError(theme, self.list_available_themes())
        self.source = config_file
        self._load(config_file)

    def _find_config_file(self, theme: str):
        """Find the theme file, checking locations in priority order.

        Returns:
            Path (or importlib Traversable) of the file, or None if not found.
        """
        filename = f"{theme}.yaml"

        for config_dir in self._config_locations:
            config_file = config_dir / filename
            if config_file.exists():
                return config_file

        default_file = _get_package_defaults_path() / filename
        if default_file.is_file():
            return default_file

        return None

    def _load(self, config_file) -> None:
        """Merge the file's ``styles`` mapping over the defaults."""
        yaml = _get_yaml()
        content = config_file.read_text(encoding="utf-8")

        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as exc:
            logger.warning("Ignoring unreadable theme file %s: %s", config_file, exc)
            return

        if not isinstance(data, dict):
            return

        styles = data.get("styles") or {}
        if not isinstance(styles, dict):
            logger.warning("Theme %s: 'styles' must be a mapping", config_file)
            return

        for name, entry in styles.items():
            try:
                category = Category(name)
            except ValueError:
                logger.warning("Theme %s: unknown category %r skipped", config_file, name)
                continue
            if not isinstance(entry, dict):
                logger.warning("Theme %s: style for %r must be a mapping", config_file, name)
                continue

            unknown = set(entry) - set(_STYLE_TYPES)
            if unknown:
                logger.warning(
                    "Theme %s: unknown keys %s for %r skipped",
                    config_file,
                    ", ".join(sorted(unknown)),
                    name,
                )
            known = {}
            for key, value in entry.items():
                if key not in _STYLE_TYPES:
                    continue
                if not isinstance(value, _STYLE_TYPES[key]):
                    logger.warning(
                        "Theme %s: %s for %r must be %s, got %r; skipped",
                        config_file,
                        key,
                        name,
                        " or ".join(t.__name__ for t in _STYLE_TYPES[key]),
                        value,
                    )
                    continue
                known[key] = value
            self._styles[category] = replace(self._styles[category], **known)

    def get_styles(self) -> dict[Category, Style]:
        """Get the resolved style for every category.

        Returns:
            Dict mapping each :class:`Category` to its :class:`Style`.
        """
        return self._styles.copy()

    def style_for(self, category: Category) -> Style:
        return self._styles[category]

    def list_available_themes(self) -> list[str]:
        """List theme names found in any config location, sorted."""
        names: set[str] = set()
        for config_dir in self._config_locations:
            if config_dir.is_dir():
                names.update(p.stem for p in config_dir.glob("*.yaml"))

        defaults = _get_package_defaults_path()
        if defaults.is_dir():
            names.update(
                entry.name[: -len(".yaml")]
                for entry in defaults.iterdir()
                if entry.name.endswith(".yaml")
            )
        return sorted(names)
