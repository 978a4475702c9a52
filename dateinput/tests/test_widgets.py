# dateinput/tests/test_widgets.py
import datetime
import tempfile
import unittest
from pathlib import Path

from dateinput import (
    DateInput,
    DatePickerStyles,
    InputConfig,
    InputLabel,
    ThemeConfig,
    ValidationError,
    build_input_descriptor,
    date_input,
    render_page,
    restore_context,
)
from dateinput.base import Widget, make_hashable
from dateinput.bundle import SassCompiler


class StubCompiler(SassCompiler):
    """Returns fixed CSS instead of running libsass."""
    def __init__(self):
        super().__init__()
        self.calls = []

    def compile(self, sources, template=None):
        self.calls.append(list(sources))
        return "/* stub */\n" + "\n".join(sources)


def attrs(**kwargs):
    return build_input_descriptor(InputConfig(input_id="d", **kwargs)).attributes


class TestInputDescriptor(unittest.TestCase):
    def test_native_date_and_string_agree(self):
        from_date = attrs(value=datetime.date(2012, 2, 29))["data-initial-date"]
        from_datetime = attrs(value=datetime.datetime(2012, 2, 29, 8, 30))["data-initial-date"]
        from_string = attrs(value="2012-02-29")["data-initial-date"]
        self.assertEqual(from_date, "2012-02-29")
        self.assertEqual(from_date, from_string)
        self.assertEqual(from_date, from_datetime)

    def test_initial_date_is_canonical_whatever_the_format(self):
        a = attrs(value="2012-02-29", format="mm/dd/yy")
        self.assertEqual(a["data-initial-date"], "2012-02-29")
        self.assertEqual(a["data-date-format"], "mm/dd/yy")

    def test_absent_disabled_lists_are_null(self):
        a = attrs()
        self.assertEqual(a["data-date-dates-disabled"], "null")
        self.assertEqual(a["data-date-days-of-week-disabled"], "null")

    def test_empty_disabled_lists_are_null(self):
        a = attrs(datesdisabled=[], daysofweekdisabled=[])
        self.assertEqual(a["data-date-dates-disabled"], "null")
        self.assertEqual(a["data-date-days-of-week-disabled"], "null")

    def test_days_of_week_disabled(self):
        self.assertEqual(attrs(daysofweekdisabled=[1, 2])["data-date-days-of-week-disabled"], "[1,2]")

    def test_dates_disabled(self):
        a = attrs(datesdisabled=["2012-03-01", datetime.date(2012, 3, 2)])
        self.assertEqual(a["data-date-dates-disabled"], '["2012-03-01","2012-03-02"]')

    def test_single_disabled_date(self):
        self.assertEqual(attrs(datesdisabled="2012-03-01")["data-date-dates-disabled"], '["2012-03-01"]')

    def test_defaults(self):
        a = attrs()
        self.assertEqual(list(a)[:2], ["type", "class"])
        self.assertEqual(a["type"], "text")
        self.assertEqual(a["class"], "form-control")
        self.assertEqual(a["data-date-language"], "en")
        self.assertEqual(a["data-date-week-start"], "0")
        self.assertEqual(a["data-date-format"], "yyyy-mm-dd")
        self.assertEqual(a["data-date-start-view"], "month")
        self.assertEqual(a["data-date-autoclose"], "true")

    def test_absent_dates_are_omitted(self):
        a = attrs()
        self.assertNotIn("data-initial-date", a)
        self.assertNotIn("data-min-date", a)
        self.assertNotIn("data-max-date", a)

    def test_min_max(self):
        a = attrs(min=datetime.date(2012, 1, 1), max="2012-12-31")
        self.assertEqual(a["data-min-date"], "2012-01-01")
        self.assertEqual(a["data-max-date"], "2012-12-31")

    def test_passthrough_options(self):
        a = attrs(language="ru", weekstart=1, startview="decade", autoclose=False)
        self.assertEqual(a["data-date-language"], "ru")
        self.assertEqual(a["data-date-week-start"], "1")
        self.assertEqual(a["data-date-start-view"], "decade")
        self.assertEqual(a["data-date-autoclose"], "false")

    def test_weekstart_is_not_range_checked(self):
        self.assertEqual(attrs(weekstart=9)["data-date-week-start"], "9")

    def test_malformed_dates_raise(self):
        for field in ("value", "min", "max"):
            with self.assertRaises(ValidationError) as cm:
                attrs(**{field: "02/29/2012"})
            self.assertEqual(cm.exception.arg_name, field)
            self.assertEqual(cm.exception.kind, "malformed_date")
        with self.assertRaises(ValidationError):
            attrs(datesdisabled=["2012-03-01", "bad"])

    def test_width(self):
        d = build_input_descriptor(InputConfig(input_id="d", width=400))
        self.assertEqual(d.container_style, "width: 400px;")
        self.assertIsNone(build_input_descriptor(InputConfig(input_id="d")).container_style)
        with self.assertRaises(ValidationError):
            build_input_descriptor(InputConfig(input_id="d", width="huge"))


class TestRestoreInput(unittest.TestCase):
    def test_restored_value_overrides_default(self):
        with restore_context({"d": "2020-01-02"}):
            self.assertEqual(attrs(value="2012-02-29")["data-initial-date"], "2020-01-02")

    def test_restored_value_is_normalized(self):
        with restore_context({"d": datetime.date(2020, 1, 2)}):
            self.assertEqual(attrs()["data-initial-date"], "2020-01-02")

    def test_other_ids_are_untouched(self):
        with restore_context({"other": "2020-01-02"}):
            self.assertEqual(attrs(value="2012-02-29")["data-initial-date"], "2012-02-29")

    def test_context_is_scoped(self):
        with restore_context({"d": "2020-01-02"}):
            pass
        self.assertEqual(attrs(value="2012-02-29")["data-initial-date"], "2012-02-29")

    def test_malformed_restored_value(self):
        with restore_context({"d": "01/02/2020"}):
            with self.assertRaises(ValidationError):
                attrs()


class TestWidget(unittest.TestCase):
    def test_container_renders_children(self):
        html = Widget(key="w", children=[InputLabel("d", "x")]).to_html()
        self.assertEqual(html, '<div id="w"><label class="control-label" id="d-label" for="d">x</label></div>')

    def test_internal_id_without_key(self):
        w = Widget()
        self.assertEqual(w.get_unique_id(), w.get_unique_id())
        self.assertNotEqual(w.get_unique_id(), Widget().get_unique_id())

    def test_dependencies_of_children(self):
        self.assertEqual(Widget(children=[InputLabel("d")]).get_dependencies(), [])

    def test_make_hashable_ignores_key_order(self):
        self.assertEqual(make_hashable({"b": [1, 2], "a": "x"}), (("a", "x"), ("b", (1, 2))))
        self.assertEqual(make_hashable({"a": 1, "b": 2}), make_hashable({"b": 2, "a": 1}))

    def test_make_hashable_keeps_order_of_lists(self):
        self.assertEqual(make_hashable({"sources": ["$b: 1;", "$a: 2;"]}), (("sources", ("$b: 1;", "$a: 2;")),))

    def test_make_hashable_has_no_special_objects(self):
        class Styled:
            def to_tuple(self): return ("converted",)
        value = Styled()
        self.assertIs(make_hashable(value), value)


class TestInputLabel(unittest.TestCase):
    def test_label(self):
        html = InputLabel("d", "Date:").to_html()
        self.assertEqual(html, '<label class="control-label" id="d-label" for="d">Date:</label>')

    def test_null_label(self):
        html = InputLabel("d", None).to_html()
        self.assertIn('class="control-label shiny-label-null"', html)
        self.assertIn("></label>", html)

    def test_label_is_escaped(self):
        self.assertIn("&lt;b&gt;Date&lt;/b&gt;", InputLabel("d", "<b>Date</b>").to_html())

    def test_markup_label_is_kept(self):
        class Markup(str):
            def __html__(self): return str(self)
        self.assertIn("<b>Date</b>", InputLabel("d", Markup("<b>Date</b>")).to_html())


class TestDateInput(unittest.TestCase):
    def setUp(self):
        DatePickerStyles.compiled_styles.clear()
        self._tmp = tempfile.TemporaryDirectory()
        self.out_dir = Path(self._tmp.name)

    def tearDown(self):
        self._tmp.cleanup()

    def test_html(self):
        html = DateInput("date5", "Date:", language="ru", weekstart=1, width="50%").to_html()
        self.assertTrue(html.startswith('<div id="date5" class="shiny-date-input form-group shiny-input-container" style="width: 50%;">'))
        self.assertIn('<label class="control-label" id="date5-label" for="date5">Date:</label>', html)
        self.assertIn('<input type="text" class="form-control" data-date-language="ru" data-date-week-start="1"', html)
        self.assertTrue(html.endswith("</div>"))

    def test_json_attributes_are_escaped_in_html(self):
        html = DateInput("d", "Date:", datesdisabled=["2012-03-01"], daysofweekdisabled=[1, 2]).to_html()
        self.assertIn('data-date-dates-disabled="[&quot;2012-03-01&quot;]"', html)
        self.assertIn('data-date-days-of-week-disabled="[1,2]"', html)

    def test_validation_happens_at_construction(self):
        with self.assertRaises(ValidationError):
            DateInput("d", "Date:", value="2012-02-30")

    def test_static_dependencies(self):
        fragment = date_input("d", "Date:", value="2012-02-29")
        names = [dep.name for dep in fragment.dependencies]
        self.assertEqual(names, ["bootstrap-datepicker-css", "bootstrap-datepicker-js"])
        head = fragment.head()
        self.assertIn('<link href="shared/datepicker/css/bootstrap-datepicker3.min.css" rel="stylesheet" />', head)
        self.assertIn('<script src="shared/datepicker/js/bootstrap-datepicker.min.js"></script>', head)
        self.assertIn("$.fn.bsDatepicker = datepicker;", head)
        self.assertEqual(str(fragment), fragment.html)

    def test_themed_inputs_get_separate_stylesheets(self):
        theme = ThemeConfig(output_dir=self.out_dir)
        compiler = StubCompiler()
        pink = date_input("a", "A", style_variables={"brand-primary": "#e83e8c"}, theme=theme, compiler=compiler)
        teal = date_input("b", "B", style_variables={"brand-primary": "#20c997"}, theme=theme, compiler=compiler)
        pink_css = pink.dependencies[0]
        teal_css = teal.dependencies[0]
        self.assertTrue(pink_css.name.startswith("datepicker-datepicker-css-"))
        self.assertNotEqual(pink_css.name, teal_css.name)

        page = render_page([pink, teal])
        self.assertIn(f"lib/{pink_css.name}-1.9.0/custom.css", page)
        self.assertIn(f"lib/{teal_css.name}-1.9.0/custom.css", page)
        self.assertEqual(page.count("bootstrap-datepicker.min.js"), 1)

    def test_identical_variables_share_one_stylesheet(self):
        theme = ThemeConfig(output_dir=self.out_dir)
        compiler = StubCompiler()
        first = date_input("a", "A", style_variables={"brand-primary": "#e83e8c"}, theme=theme, compiler=compiler)
        second = date_input("b", "B", style_variables={"$brand-primary": "#e83e8c"}, theme=theme, compiler=compiler)
        self.assertEqual(first.dependencies[0], second.dependencies[0])
        self.assertEqual(len(compiler.calls), 1)
        page = render_page([first, second])
        self.assertEqual(page.count("custom.css"), 1)


if __name__ == '__main__':
    unittest.main()
