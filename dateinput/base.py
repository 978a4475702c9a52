# dateinput/base.py
import html
import logging
import uuid
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


# --- Hashable Helper for Style Values ---
def make_hashable(value):
    """
    Converts a given value to a hashable, order-independent representation.

    Mappings become sorted tuples of ``(key, value)`` pairs, lists become tuples.
    Used to canonicalize the stylesheet sources before fingerprinting them.

    :param value: Any value, mapping or sequence.
    :return: A hashable version of the value.
    """
    if isinstance(value, (str, int, float, bool, tuple, type(None))):
        return value
    elif isinstance(value, list):
        return tuple(make_hashable(v) for v in value)
    elif isinstance(value, dict):
        return tuple(sorted((str(k), make_hashable(v)) for k, v in value.items()))
    try:
        hash(value)
        return value
    except TypeError:
        logger.warning("Cannot make type %s hashable, using its string form.", type(value))
        return str(value)


def render_attrs(attrs: Dict[str, Any]) -> str:
    """
    Render an attribute mapping as `` name="value"`` pairs.

    ``None`` values are dropped, everything else is escaped.
    """
    parts = []
    for name, value in attrs.items():
        if value is None:
            continue
        parts.append(f' {name}="{html.escape(str(value), quote=True)}"')
    return "".join(parts)


def render_content(content: Any) -> str:
    """Escape text content unless it already is markup (``__html__``)."""
    if content is None:
        return ""
    if hasattr(content, '__html__'):
        return content.__html__()
    return html.escape(str(content))


class Widget:
    """
    The base class for the widgets in this package.

    A widget exposes the properties it renders from (``render_props``), turns
    them into markup (``_generate_html_stub``) and declares the page assets it
    needs (``get_dependencies``).

    :param key: Optional identifier for the widget; doubles as the HTML id.
    :param children: Optional list of child widgets.
    """

    def __init__(self, key: Optional[str] = None, children: Optional[List['Widget']] = None):
        self.key = key
        self._children: List['Widget'] = children if children is not None else []
        self._internal_id: str = str(uuid.uuid4())

    def get_unique_id(self) -> str:
        """Returns the key if set, else an internal UUID."""
        return self.key if self.key is not None else self._internal_id

    def get_children(self) -> List['Widget']:
        return self._children

    def render_props(self) -> Dict[str, Any]:
        """
        Return the properties the HTML is generated from.

        Subclasses override this with their attribute values.
        """
        return {}

    def get_dependencies(self) -> list:
        """
        Return the HTML dependencies (stylesheets, scripts) this widget needs,
        including those of its children.
        """
        deps = []
        for child in self.get_children():
            deps.extend(child.get_dependencies())
        return deps

    @staticmethod
    def _generate_html_stub(widget_instance: 'Widget', html_id: str, props: Dict) -> str:
        children_html = "".join(child.to_html() for child in widget_instance.get_children())
        return f'<div id="{html.escape(html_id, quote=True)}">{children_html}</div>'

    def to_html(self) -> str:
        """Render this widget to an HTML string."""
        return type(self)._generate_html_stub(self, str(self.get_unique_id()), self.render_props())

    def __html__(self) -> str:
        return self.to_html()

    def __repr__(self):
        return f"{self.__class__.__name__}(key={self.key!r})"
