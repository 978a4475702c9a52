# dateinput/theme.py
"""
Theme settings and the per-version datepicker style defaults.

When a site-wide theme is active, the datepicker stylesheet is compiled
against the theme's variables. The theme engine contributes a ``preamble``
(its own SCSS variables and functions) and this module contributes the
datepicker-specific variables that map the theme onto the calendar.
"""
import logging
import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple, Union

logger = logging.getLogger(__name__)

DATEPICKER_VERSION = "1.9.0"
DATEPICKER_HREF = "shared/datepicker"


@dataclass(frozen=True)
class ThemeDefaults:
    """SCSS function sources plus ordered variable defaults for one theme version."""
    functions: Tuple[str, ...] = ()
    variables: Dict[str, str] = field(default_factory=dict)

    def is_empty(self) -> bool:
        return not self.functions and not self.variables


# Bootstrap 3 already defines these variables, so they are plain overrides.
_LEGACY_FUNCTIONS = (
    """@function color-contrast($color, $dark: $gray-darker, $light: $text-color) {
  @return if(
    red($color) * 0.299 + green($color) * 0.587 + blue($color) * 0.114 > 150,
    $dark, $light
  );
}""",
)

_LEGACY_VARIABLES = {
    "btn-primary-color": "color-contrast($btn-primary-bg)",
    "btn-primary-color-hover": "color-contrast($gray-lighter)",
    "state-info-bg": "mix($body-bg, $brand-primary, 20%)",
    "dropdown-bg": "$body-bg",
    "dropdown-border": "mix($text-color, $body-bg, 15%)",
}

# Bootstrap 4 names mapped back onto the Bootstrap 3 names the datepicker uses.
_CURRENT_VARIABLES = {
    "gray": "gray('300')",
    "gray-light": "gray('500')",
    "gray-lighter": "gray('900')",
    "brand-primary": "mix($black, theme-color('primary'), 6.5%)",
    "btn-primary-color": "color-yiq($brand-primary)",
    "btn-primary-color-hover": "color-yiq($gray-lighter)",
    "btn-primary-bg": "$brand-primary",
    "btn-primary-border": "darken($btn-primary-bg, 5%)",
    "btn-link-disabled-color": "$gray-light",
    "state-info-bg": "mix($white, $brand-primary, 20%)",
    "line-height-base": "20/14",
    "border-radius-base": "4px",
    "dropdown-bg": "$white",
    "dropdown-border": "mix($black, $white, 15%)",
}


def _version_parts(version: Union[None, str, int, Sequence]) -> Tuple[str, ...]:
    if version is None:
        return ()
    if isinstance(version, (list, tuple)):
        return tuple(str(v).strip() for v in version)
    # "4+3" is Bootstrap 4 with the Bootstrap 3 compatibility layer.
    return tuple(part.strip() for part in str(version).split("+"))


def theme_date_defaults(version: Union[None, str, int, Sequence]) -> ThemeDefaults:
    """
    Return the datepicker defaults for a detected theme major version.

    :param version: ``"3"``, ``"4"``, ``"4+3"`` or a sequence of such parts.
    :return: Legacy defaults when any part is ``"3"``, current defaults when a
        part is ``"4"``, otherwise empty defaults.
    """
    parts = _version_parts(version)
    if "3" in parts:
        return ThemeDefaults(functions=_LEGACY_FUNCTIONS, variables=dict(_LEGACY_VARIABLES))
    if "4" in parts:
        return ThemeDefaults(variables=dict(_CURRENT_VARIABLES))
    if parts:
        logger.warning("Unknown theme version %r, no datepicker theme defaults applied.", version)
    return ThemeDefaults()


def default_output_dir() -> Path:
    return Path(tempfile.gettempdir()) / "dateinput-datepicker"


@dataclass
class ThemeConfig:
    """
    Explicit theming settings passed to the style bundle resolver.

    :param enabled: Whether a site-wide theme is active.
    :param version: Detected theme major version (see ``theme_date_defaults``).
    :param preamble: SCSS sources from the theme engine, prepended when enabled.
    :param output_dir: Where compiled stylesheets are written.
    :param datepicker_version: Version reported on the datepicker dependencies.
    :param href: URL prefix of the shipped datepicker assets.
    """
    enabled: bool = False
    version: Optional[str] = None
    preamble: List[str] = field(default_factory=list)
    output_dir: Path = field(default_factory=default_output_dir)
    datepicker_version: str = DATEPICKER_VERSION
    href: str = DATEPICKER_HREF

    def __post_init__(self):
        self.output_dir = Path(self.output_dir)

    def defaults(self) -> ThemeDefaults:
        """Theme defaults for this config; empty when theming is off."""
        if not self.enabled:
            return ThemeDefaults()
        return theme_date_defaults(self.version)

    @classmethod
    def from_config(cls, config) -> 'ThemeConfig':
        """
        Build a ThemeConfig from a ``Config``.

        Preamble entries ending in ``.scss`` or ``.css`` are files (relative to
        the config file) and are read; a missing one is skipped with a warning.
        Any other entry is used as inline SCSS.
        """
        base_dir = config.resolved_config_path.parent if config.resolved_config_path else Path.cwd()
        preamble = []
        for entry in config.get_nested("theming.preamble", []) or []:
            entry = str(entry)
            candidate = Path(entry)
            if not candidate.is_absolute():
                candidate = base_dir / candidate
            if "\n" in entry or candidate.suffix not in (".scss", ".css"):
                preamble.append(entry)
            elif candidate.is_file():
                preamble.append(candidate.read_text(encoding="utf-8"))
            else:
                logger.warning("Theme preamble file %s does not exist, skipping it.", candidate)

        version = config.get_nested("theming.version")
        output_dir = config.get("output_dir") or os.environ.get("DATEINPUT_OUTPUT_DIR")
        return cls(
            enabled=bool(config.get_nested("theming.enabled", False)),
            version=str(version) if version is not None else None,
            preamble=preamble,
            output_dir=Path(output_dir) if output_dir else default_output_dir(),
            datepicker_version=str(config.get_nested("datepicker.version", DATEPICKER_VERSION)),
            href=config.get_nested("datepicker.href", DATEPICKER_HREF),
        )
