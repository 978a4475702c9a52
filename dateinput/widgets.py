# dateinput/widgets.py
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from .base import Widget, render_attrs, render_content
from .bundle import DatePickerStyles, SassCompiler, StyleBundle
from .dates import DateLike, date_ymd, dates_ymd, to_json_array
from .dependencies import HtmlDependency, RenderedFragment
from .session import restore_input
from .styles import validate_css_unit
from .theme import ThemeConfig

CONTAINER_CLASS = "shiny-date-input form-group shiny-input-container"
LABEL_CLASS = "control-label"
NULL_LABEL_CLASS = "shiny-label-null"
INPUT_CLASS = "form-control"


@dataclass
class InputConfig:
    """
    All parameters of one date input.

    ``value``, ``min`` and ``max`` are dates or ``yyyy-mm-dd`` strings; a
    ``None`` value lets the browser start on the client's current date.
    ``format`` only controls the display in the browser, values are always
    sent as ``yyyy-mm-dd``. ``weekstart`` is 0 (Sunday) to 6 (Saturday) and is
    not checked here.
    """
    input_id: str
    label: Any = None
    value: Optional[DateLike] = None
    min: Optional[DateLike] = None
    max: Optional[DateLike] = None
    format: str = "yyyy-mm-dd"
    startview: str = "month"
    weekstart: int = 0
    language: str = "en"
    width: Any = None
    autoclose: bool = True
    datesdisabled: Any = None
    daysofweekdisabled: Any = None
    style_variables: Dict[str, str] = field(default_factory=dict)


class InputLabel(Widget):
    """
    The ``<label>`` of an input. A ``None`` label still renders (empty) so the
    client can fill it in later, but is marked with ``shiny-label-null``.
    """

    def __init__(self, input_id: str, label: Any = None):
        super().__init__(key=f"{input_id}-label", children=[])
        self.input_id = input_id
        self.label = label

    def render_props(self) -> Dict[str, Any]:
        css_class = LABEL_CLASS if self.label is not None else f"{LABEL_CLASS} {NULL_LABEL_CLASS}"
        return {'class': css_class, 'for': self.input_id, 'label': self.label}

    @staticmethod
    def _generate_html_stub(widget_instance: 'InputLabel', html_id: str, props: Dict) -> str:
        attrs = render_attrs({'class': props['class'], 'id': html_id, 'for': props['for']})
        return f"<label{attrs}>{render_content(props.get('label'))}</label>"


@dataclass
class InputDescriptor:
    """Normalized attributes of the ``<input>`` element plus its label."""
    input_id: str
    attributes: Dict[str, str]
    label: InputLabel
    container_style: Optional[str] = None


def build_input_descriptor(config: InputConfig) -> InputDescriptor:
    """
    Normalize ``config`` into the attribute set read by the datepicker script.

    Raises ``ValidationError`` for malformed dates or widths. A value saved in
    the active restore context replaces ``config.value``.
    """
    value = date_ymd(config.value, "value")
    min_date = date_ymd(config.min, "min")
    max_date = date_ymd(config.max, "max")
    datesdisabled = dates_ymd(config.datesdisabled, "datesdisabled")

    value = date_ymd(restore_input(config.input_id, value), "value")

    width = validate_css_unit(config.width, "width")

    attributes = {
        'type': "text",
        'class': INPUT_CLASS,
        'data-date-language': config.language,
        'data-date-week-start': str(config.weekstart),
        'data-date-format': config.format,
        'data-date-start-view': config.startview,
        'data-min-date': min_date,
        'data-max-date': max_date,
        'data-initial-date': value,
        'data-date-autoclose': "true" if config.autoclose else "false",
        'data-date-dates-disabled': to_json_array(datesdisabled),
        'data-date-days-of-week-disabled': to_json_array(config.daysofweekdisabled),
    }
    return InputDescriptor(
        input_id=config.input_id,
        attributes={k: v for k, v in attributes.items() if v is not None},
        label=InputLabel(config.input_id, config.label),
        container_style=f"width: {width};" if width is not None else None,
    )


class DateInput(Widget):
    """
    A text input that opens a calendar when clicked.

    Parameters are validated when the widget is created; the stylesheet is
    resolved (and compiled, for themed inputs) when it is first rendered.
    Inputs with identical effective style variables share one compiled
    stylesheet.

    Example::

        DateInput("date3", "Date:", value="2012-02-29", format="mm/dd/yy")
        DateInput("date7", "Date:", daysofweekdisabled=[1, 2])
        DateInput("date8", "Date:", datesdisabled=["2012-03-01", "2012-03-02"])
    """

    def __init__(self,
                 input_id: str,
                 label: Any = None,
                 value: Optional[DateLike] = None,
                 min: Optional[DateLike] = None,
                 max: Optional[DateLike] = None,
                 format: str = "yyyy-mm-dd",
                 startview: str = "month",
                 weekstart: int = 0,
                 language: str = "en",
                 width: Any = None,
                 autoclose: bool = True,
                 datesdisabled: Any = None,
                 daysofweekdisabled: Any = None,
                 style_variables: Optional[Mapping[str, str]] = None,
                 theme: Optional[ThemeConfig] = None,
                 compiler: Optional[SassCompiler] = None):

        self.config = InputConfig(
            input_id=input_id, label=label, value=value, min=min, max=max,
            format=format, startview=startview, weekstart=weekstart,
            language=language, width=width, autoclose=autoclose,
            datesdisabled=datesdisabled, daysofweekdisabled=daysofweekdisabled,
            style_variables=dict(style_variables or {}),
        )
        self.descriptor = build_input_descriptor(self.config)
        super().__init__(key=input_id, children=[self.descriptor.label])

        self.theme = theme if theme is not None else ThemeConfig()
        self.compiler = compiler
        self._bundle: Optional[StyleBundle] = None

    def style_bundle(self) -> StyleBundle:
        if self._bundle is None:
            styles = DatePickerStyles(self.theme, self.compiler)
            self._bundle = styles.resolve(self.config.style_variables)
        return self._bundle

    def render_props(self) -> Dict[str, Any]:
        return {
            'css_class': CONTAINER_CLASS,
            'style': self.descriptor.container_style,
            'attributes': self.descriptor.attributes,
        }

    def get_dependencies(self) -> List[HtmlDependency]:
        return super().get_dependencies() + self.style_bundle().dependencies

    @staticmethod
    def _generate_html_stub(widget_instance: 'DateInput', html_id: str, props: Dict) -> str:
        container_attrs = render_attrs({'id': html_id, 'class': props['css_class'], 'style': props.get('style')})
        label_html = widget_instance.descriptor.label.to_html()
        input_attrs = render_attrs(props['attributes'])
        return (
            f"<div{container_attrs}>\n"
            f"  {label_html}\n"
            f"  <input{input_attrs}/>\n"
            f"</div>"
        )

    def render(self) -> RenderedFragment:
        """Render the markup and collect the dependencies it needs."""
        return RenderedFragment(html=self.to_html(), dependencies=self.get_dependencies())


def date_input(input_id: str, label: Any = None, **kwargs) -> RenderedFragment:
    """Build and render a ``DateInput``; keyword arguments as for ``DateInput``."""
    return DateInput(input_id, label, **kwargs).render()
