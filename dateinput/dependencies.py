# dateinput/dependencies.py
import html
import logging
import re
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HtmlDependency:
    """
    A named, versioned set of page assets.

    ``src`` is either ``{"href": <url prefix>}`` for assets served by the host
    framework, or ``{"file": <directory>}`` for files on disk that have to be
    copied next to the page.
    """
    name: str
    version: str
    src: Dict[str, str]
    stylesheet: Tuple[str, ...] = ()
    script: Tuple[str, ...] = ()
    head: Optional[str] = None

    @property
    def is_file_based(self) -> bool:
        return "href" not in self.src and "file" in self.src

    def url_prefix(self, lib_dir: str = "lib") -> str:
        if "href" in self.src:
            return self.src["href"].rstrip("/")
        return f"{lib_dir.rstrip('/')}/{self.name}-{self.version}"

    def to_tags(self, lib_dir: str = "lib") -> List[str]:
        """Return the ``<link>``/``<script>`` tags and raw head HTML for this dependency."""
        prefix = self.url_prefix(lib_dir)
        tags = []
        for sheet in self.stylesheet:
            href = html.escape(f"{prefix}/{sheet}", quote=True)
            tags.append(f'<link href="{href}" rel="stylesheet" />')
        for script in self.script:
            src = html.escape(f"{prefix}/{script}", quote=True)
            tags.append(f'<script src="{src}"></script>')
        if self.head:
            tags.append(self.head)
        return tags


def _version_key(version: str) -> Tuple:
    return tuple(int(p) if p.isdigit() else p for p in re.split(r"[.\-]", str(version)))


def resolve_dependencies(dependencies: Iterable[HtmlDependency]) -> List[HtmlDependency]:
    """
    Keep one dependency per name, preferring the highest version.

    The result keeps the order in which names were first seen.
    """
    chosen: Dict[str, HtmlDependency] = {}
    for dep in dependencies:
        current = chosen.get(dep.name)
        if current is None:
            chosen[dep.name] = dep
            continue
        try:
            newer = _version_key(dep.version) > _version_key(current.version)
        except TypeError:
            # Mixed numeric/text parts, fall back to plain text ordering.
            newer = str(dep.version) > str(current.version)
        if newer:
            chosen[dep.name] = dep
    return list(chosen.values())


def render_dependencies(dependencies: Iterable[HtmlDependency], lib_dir: str = "lib") -> str:
    """Render the de-duplicated head tags for a list of dependencies."""
    tags = []
    for dep in resolve_dependencies(dependencies):
        tags.extend(dep.to_tags(lib_dir))
    return "\n".join(tags)


def copy_dependency_to_dir(dependency: HtmlDependency, out_dir: Path) -> Optional[Path]:
    """
    Copy the files of a file-based dependency to ``<out_dir>/<name>-<version>/``.

    Href dependencies are served by the host and are left alone (returns None).
    """
    if not dependency.is_file_based:
        return None
    src_dir = Path(dependency.src["file"])
    target = Path(out_dir) / f"{dependency.name}-{dependency.version}"
    target.mkdir(parents=True, exist_ok=True)
    for rel in dependency.stylesheet + dependency.script:
        source = src_dir / rel
        destination = target / rel
        destination.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(source, destination)
        logger.debug("Copied %s -> %s", source, destination)
    return target


@dataclass
class RenderedFragment:
    """Markup for a widget plus the dependencies it needs in the page head."""
    html: str
    dependencies: List[HtmlDependency] = field(default_factory=list)

    def head(self, lib_dir: str = "lib") -> str:
        return render_dependencies(self.dependencies, lib_dir)

    def __html__(self) -> str:
        return self.html

    def __str__(self) -> str:
        return self.html


def render_page(fragments: Iterable[RenderedFragment], title: str = "Date input", lib_dir: str = "lib") -> str:
    """Render a complete HTML page holding ``fragments``, with one copy of each dependency."""
    fragments = list(fragments)
    deps: List[HtmlDependency] = []
    for fragment in fragments:
        deps.extend(fragment.dependencies)
    head = render_dependencies(deps, lib_dir)
    body = "\n".join(fragment.html for fragment in fragments)
    return f"""<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8" />
  <title>{html.escape(title)}</title>
{head}
</head>
<body>
{body}
</body>
</html>
"""
