import logging
from pathlib import Path
from typing import Dict, List, Optional

import typer

from dateinput import (
    Config,
    DateInput,
    DateInputError,
    ThemeConfig,
    copy_dependency_to_dir,
    render_page,
    resolve_dependencies,
    resolve_style_bundle,
)
from dateinput.logging_config import configure_logging


# Create the main Typer application object
app = typer.Typer(
    name="dateinput",
    help="Render date inputs and their datepicker stylesheets.",
    add_completion=False
)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug messages."),
):
    configure_logging(logging.DEBUG if verbose else None)


# --- Helpers ---

def parse_variables(pairs: Optional[List[str]]) -> Dict[str, str]:
    """Turn repeated ``--var name=expr`` options into an ordered mapping."""
    variables: Dict[str, str] = {}
    for pair in pairs or []:
        name, sep, expr = pair.partition("=")
        if not sep or not name.strip():
            raise typer.BadParameter(f"Expected name=expression, got '{pair}'", param_hint="--var")
        variables[name.strip()] = expr.strip()
    return variables


def load_theme(config_path: Optional[Path], theme_version: Optional[str]) -> ThemeConfig:
    theme = ThemeConfig.from_config(Config(config_path))
    if theme_version:
        theme.enabled = True
        theme.version = theme_version
    return theme


def build_widget(input_id, label, value, min_date, max_date, date_format, startview,
                 weekstart, language, width, autoclose, disable_date, disable_weekday,
                 variables, config_path, theme_version) -> DateInput:
    return DateInput(
        input_id,
        label,
        value=value,
        min=min_date,
        max=max_date,
        format=date_format,
        startview=startview,
        weekstart=weekstart,
        language=language,
        width=width,
        autoclose=autoclose,
        datesdisabled=disable_date or None,
        daysofweekdisabled=disable_weekday or None,
        style_variables=parse_variables(variables),
        theme=load_theme(config_path, theme_version),
    )


# --- CLI Commands ---

@app.command()
def render(
    input_id: str = typer.Argument(..., help="The input id."),
    label: str = typer.Argument("", help="Label shown above the input."),
    value: Optional[str] = typer.Option(None, help="Initial date, yyyy-mm-dd."),
    min_date: Optional[str] = typer.Option(None, "--min", help="Minimum date, yyyy-mm-dd."),
    max_date: Optional[str] = typer.Option(None, "--max", help="Maximum date, yyyy-mm-dd."),
    date_format: str = typer.Option("yyyy-mm-dd", "--format", help="Display format in the browser."),
    startview: str = typer.Option("month", help="month, year or decade."),
    weekstart: int = typer.Option(0, help="First day of the week, 0 (Sunday) to 6."),
    language: str = typer.Option("en", help="Calendar language code."),
    width: Optional[str] = typer.Option(None, help="CSS width, e.g. 400px or 100%."),
    autoclose: bool = typer.Option(True, help="Close the calendar once a date is picked."),
    disable_date: Optional[List[str]] = typer.Option(None, "--disable-date", help="A date to disable (repeatable)."),
    disable_weekday: Optional[List[int]] = typer.Option(None, "--disable-weekday", help="A weekday 0-6 to disable (repeatable)."),
    variables: Optional[List[str]] = typer.Option(None, "--var", help="Style variable name=expression (repeatable)."),
    config_path: Optional[Path] = typer.Option(None, "--config", help="Path to config.yaml."),
    theme_version: Optional[str] = typer.Option(None, "--theme-version", help="Enable theming for this major version."),
):
    """
    Prints the head tags and the HTML of a date input.
    """
    try:
        widget = build_widget(input_id, label, value, min_date, max_date, date_format, startview,
                              weekstart, language, width, autoclose, disable_date, disable_weekday,
                              variables, config_path, theme_version)
        fragment = widget.render()
    except DateInputError as e:
        print(f"❌ Error: {e}")
        raise typer.Exit(code=1)

    print(fragment.head())
    print(fragment.html)


@app.command()
def css(
    variables: Optional[List[str]] = typer.Option(None, "--var", help="Style variable name=expression (repeatable)."),
    config_path: Optional[Path] = typer.Option(None, "--config", help="Path to config.yaml."),
    theme_version: Optional[str] = typer.Option(None, "--theme-version", help="Enable theming for this major version."),
):
    """
    Prints the datepicker stylesheet for the given variables and theme.
    """
    try:
        bundle = resolve_style_bundle(parse_variables(variables), load_theme(config_path, theme_version))
    except DateInputError as e:
        print(f"❌ Error: {e}")
        raise typer.Exit(code=1)

    if bundle.kind == "static":
        sheet = bundle.stylesheet
        print(f"/* static stylesheet: {sheet.url_prefix()}/{sheet.stylesheet[0]} */")
    else:
        print(f"/* {bundle.stylesheet.name} ({bundle.path}) */")
        print(bundle.css)


@app.command()
def preview(
    input_id: str = typer.Argument(..., help="The input id."),
    label: str = typer.Argument("", help="Label shown above the input."),
    out: Path = typer.Option(..., "--out", help="Directory to write index.html into."),
    value: Optional[str] = typer.Option(None, help="Initial date, yyyy-mm-dd."),
    date_format: str = typer.Option("yyyy-mm-dd", "--format", help="Display format in the browser."),
    language: str = typer.Option("en", help="Calendar language code."),
    variables: Optional[List[str]] = typer.Option(None, "--var", help="Style variable name=expression (repeatable)."),
    config_path: Optional[Path] = typer.Option(None, "--config", help="Path to config.yaml."),
    theme_version: Optional[str] = typer.Option(None, "--theme-version", help="Enable theming for this major version."),
):
    """
    Writes a standalone page holding one date input, with its compiled assets.
    """
    try:
        widget = build_widget(input_id, label, value, None, None, date_format, "month",
                              0, language, None, True, None, None,
                              variables, config_path, theme_version)
        fragment = widget.render()
    except DateInputError as e:
        print(f"❌ Error: {e}")
        raise typer.Exit(code=1)

    out.mkdir(parents=True, exist_ok=True)
    lib_dir = out / "lib"
    for dep in resolve_dependencies(fragment.dependencies):
        copied = copy_dependency_to_dir(dep, lib_dir)
        if copied:
            print(f"✅ Copied {dep.name} to {copied}")

    page_path = out / "index.html"
    page_path.write_text(render_page([fragment], title=label or input_id), encoding="utf-8")
    print(f"✅ Wrote {page_path}")


if __name__ == "__main__":
    app()
