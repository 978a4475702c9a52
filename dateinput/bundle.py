# dateinput/bundle.py
"""
Style bundle resolution for the datepicker.

Without theming or style overrides the prebuilt stylesheet shipped with the
datepicker is used. Otherwise the stylesheet is compiled from SCSS and written
under a name derived from the content, so two date inputs with different
overrides on one page never overwrite each other's stylesheet, and identical
overrides share one file.
"""
import json
import logging
import os
import re
import uuid
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence, Set, Tuple, Union

import sass
import xxhash

from .base import make_hashable
from .dependencies import HtmlDependency
from .errors import CompilationError
from .theme import ThemeConfig

logger = logging.getLogger(__name__)

SCSS_DIR = Path(__file__).parent / "www" / "datepicker" / "scss"
BASE_TEMPLATE = SCSS_DIR / "build3.scss"

STATIC_STYLESHEET = "css/bootstrap-datepicker3.min.css"
DATEPICKER_SCRIPT = "js/bootstrap-datepicker.min.js"
COMPILED_STYLESHEET = "custom.css"

# The host page may already load a different datepicker plugin under
# $.fn.datepicker, so ours is moved to $.fn.bsDatepicker.
NO_CONFLICT_HEAD = """<script>(function() {
  var datepicker = $.fn.datepicker.noConflict();
  $.fn.bsDatepicker = datepicker;
})();
</script>"""

_VARIABLE_NAME_RE = re.compile(r"^-{0,2}[A-Za-z_][\w-]*$")
_VARIABLE_REF_RE = re.compile(r"\$([A-Za-z_][\w-]*)")


class SassCompiler:
    """
    Compiles a list of SCSS sources followed by the base template to CSS.

    :param output_style: libsass output style (``expanded``, ``compressed``, ...).
    """

    def __init__(self, output_style: str = "expanded"):
        self.output_style = output_style

    def compile(self, sources: Sequence[str], template: Path = BASE_TEMPLATE) -> str:
        template = Path(template)
        source = "\n".join(list(sources) + [template.read_text(encoding="utf-8")])
        try:
            return sass.compile(
                string=source,
                include_paths=[str(template.parent)],
                output_style=self.output_style,
            )
        except sass.CompileError as e:
            raise CompilationError(f"Could not compile datepicker stylesheet: {e}") from e


@dataclass
class StyleBundle:
    """
    The stylesheet and script a date input needs.

    ``kind`` is ``"static"`` for the prebuilt stylesheet or ``"compiled"`` for a
    themed one, in which case ``fingerprint``, ``css`` and ``path`` are set.
    """
    kind: str
    stylesheet: HtmlDependency
    script: HtmlDependency
    fingerprint: Optional[str] = None
    css: Optional[str] = None
    path: Optional[Path] = None

    @property
    def dependencies(self) -> List[HtmlDependency]:
        return [self.stylesheet, self.script]


def normalize_variable_name(name: Any) -> str:
    text = str(name).strip()
    if text.startswith("$"):
        text = text[1:]
    if not _VARIABLE_NAME_RE.match(text):
        raise CompilationError(f"Invalid style variable name: {name!r}")
    return text


def _normalize_variables(variables: Mapping[str, Any]) -> Dict[str, str]:
    normalized: Dict[str, str] = {}
    for name, expr in variables.items():
        if expr is None:
            raise CompilationError(f"Style variable {name!r} has no value")
        normalized[normalize_variable_name(name)] = str(expr).strip()
    return normalized


def _references(expr: str) -> Set[str]:
    # Sass treats "-" and "_" in names as the same character.
    return {ref.replace("_", "-") for ref in _VARIABLE_REF_RE.findall(expr)}


def merge_style_variables(
    defaults: Mapping[str, Any], overrides: Optional[Mapping[str, Any]]
) -> List[Tuple[str, str]]:
    """
    Order theme defaults and user overrides into ``(name, expression)`` declarations.

    Every default is declared first, then the overrides in the caller's order,
    so an override may refer to any default or to an earlier override. A
    default that refers to a name the overrides changed is declared again after
    them so it picks up the new value.
    """
    base = _normalize_variables(defaults)
    user = _normalize_variables(overrides or {})
    declarations = list(base.items()) + list(user.items())

    changed = {name.replace("_", "-") for name in user}
    for name, expr in base.items():
        if name in user:
            continue
        if _references(expr) & changed:
            declarations.append((name, expr))
            changed.add(name.replace("_", "-"))
    return declarations


def variable_declarations(variables: Union[Mapping[str, str], Iterable[Tuple[str, str]]]) -> List[str]:
    pairs = variables.items() if isinstance(variables, Mapping) else variables
    return [f"${name}: {expr};" for name, expr in pairs]


def fingerprint(sources: Sequence[str], output_style: str = "expanded") -> str:
    """
    Content fingerprint of the exact SCSS sources handed to the compiler.

    Source order is part of the content: reordered declarations get another fingerprint.
    """
    canonical = json.dumps(
        make_hashable({"sources": list(sources), "output_style": output_style}),
        separators=(",", ":"),
        ensure_ascii=False,
    )
    return xxhash.xxh64(canonical.encode("utf-8")).hexdigest()


def static_stylesheet_dependency(theme: ThemeConfig) -> HtmlDependency:
    return HtmlDependency(
        "bootstrap-datepicker-css",
        theme.datepicker_version,
        {"href": theme.href},
        stylesheet=(STATIC_STYLESHEET,),
    )


def datepicker_script_dependency(theme: ThemeConfig) -> HtmlDependency:
    return HtmlDependency(
        "bootstrap-datepicker-js",
        theme.datepicker_version,
        {"href": theme.href},
        script=(DATEPICKER_SCRIPT,),
        head=NO_CONFLICT_HEAD,
    )


def _write_atomic(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_name(f".{path.name}.{uuid.uuid4().hex}.tmp")
    tmp.write_text(text, encoding="utf-8")
    os.replace(tmp, path)


class DatePickerStyles:
    """
    Resolves the style bundle for one date input render.

    ``compiled_styles`` maps written stylesheet paths to their CSS. An artifact
    missing from it but still on disk is read back instead of compiled again.
    """
    compiled_styles: Dict[str, str] = {}

    def __init__(self, theme: Optional[ThemeConfig] = None, compiler: Optional[SassCompiler] = None):
        self.theme = theme if theme is not None else ThemeConfig()
        self.compiler = compiler if compiler is not None else SassCompiler()

    def resolve(self, style_variables: Optional[Mapping[str, Any]] = None) -> StyleBundle:
        theme = self.theme
        script = datepicker_script_dependency(theme)

        if not theme.enabled and not style_variables:
            logger.debug("No theme and no style variables, using the static datepicker stylesheet.")
            return StyleBundle("static", static_stylesheet_dependency(theme), script)

        defaults = theme.defaults()
        declarations = merge_style_variables(defaults.variables, style_variables)
        preamble = list(theme.preamble) if theme.enabled else []
        sources = preamble + list(defaults.functions) + variable_declarations(declarations)
        fp = fingerprint(sources, self.compiler.output_style)

        out_dir = theme.output_dir / f"datepicker-scss-{fp}"
        out_file = out_dir / COMPILED_STYLESHEET
        css = self._cached(out_file)
        if css is None:
            logger.debug("Compiling datepicker stylesheet %s (%d declarations)", fp, len(declarations))
            try:
                css = self.compiler.compile(sources, BASE_TEMPLATE)
            except CompilationError as e:
                e.fingerprint = fp
                raise
            _write_atomic(out_file, css)
            DatePickerStyles.compiled_styles[str(out_file)] = css
            logger.debug("Wrote datepicker stylesheet to %s", out_file)

        stylesheet = HtmlDependency(
            f"datepicker-datepicker-css-{fp}",
            theme.datepicker_version,
            {"file": str(out_dir)},
            stylesheet=(COMPILED_STYLESHEET,),
        )
        return StyleBundle("compiled", stylesheet, script, fingerprint=fp, css=css, path=out_file)

    @staticmethod
    def _cached(out_file: Path) -> Optional[str]:
        if not out_file.is_file():
            DatePickerStyles.compiled_styles.pop(str(out_file), None)
            return None
        css = DatePickerStyles.compiled_styles.get(str(out_file))
        if css is None:
            try:
                css = out_file.read_text(encoding="utf-8")
            except OSError as e:
                logger.warning("Could not read datepicker stylesheet %s, recompiling: %s", out_file, e)
                return None
            DatePickerStyles.compiled_styles[str(out_file)] = css
            logger.debug("Loaded datepicker stylesheet %s from disk", out_file)
        else:
            logger.debug("Reusing compiled datepicker stylesheet %s", out_file)
        return css


def resolve_style_bundle(
    style_variables: Optional[Mapping[str, Any]] = None,
    theme: Optional[ThemeConfig] = None,
    compiler: Optional[SassCompiler] = None,
) -> StyleBundle:
    """Resolve the datepicker style bundle for ``style_variables`` under ``theme``."""
    return DatePickerStyles(theme, compiler).resolve(style_variables)
