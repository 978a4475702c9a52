# dateinput/__init__.py

"""
Date input widget

A text input that opens a bootstrap-datepicker calendar, rendered as HTML for
a server-driven web framework, with theme-aware stylesheet generation.
"""

# --- Widgets ---
from .base import Widget
from .widgets import (
    DateInput,
    InputLabel,
    InputConfig,
    InputDescriptor,
    build_input_descriptor,
    date_input,
)

# --- Styles and theming ---
from .bundle import (
    DatePickerStyles,
    SassCompiler,
    StyleBundle,
    fingerprint,
    merge_style_variables,
    resolve_style_bundle,
)
from .theme import ThemeConfig, ThemeDefaults, theme_date_defaults

# --- Page assets ---
from .dependencies import (
    HtmlDependency,
    RenderedFragment,
    copy_dependency_to_dir,
    render_dependencies,
    render_page,
    resolve_dependencies,
)

# --- Values, configuration and errors ---
from .dates import date_ymd, dates_ymd, to_json_array
from .styles import validate_css_unit
from .session import RestoreContext, restore_context, restore_input
from .config import Config, get_config
from .errors import CompilationError, DateInputError, ValidationError

__all__ = [
    'Widget', 'DateInput', 'InputLabel', 'InputConfig', 'InputDescriptor',
    'build_input_descriptor', 'date_input',
    'DatePickerStyles', 'SassCompiler', 'StyleBundle', 'fingerprint',
    'merge_style_variables', 'resolve_style_bundle',
    'ThemeConfig', 'ThemeDefaults', 'theme_date_defaults',
    'HtmlDependency', 'RenderedFragment', 'copy_dependency_to_dir',
    'render_dependencies', 'render_page', 'resolve_dependencies',
    'date_ymd', 'dates_ymd', 'to_json_array', 'validate_css_unit',
    'RestoreContext', 'restore_context', 'restore_input',
    'Config', 'get_config',
    'CompilationError', 'DateInputError', 'ValidationError',
]

__version__ = "0.1.0"
