"""Transform command: apply text transforms without a package."""

import typer

from ...grammar import (
    POST_TRANSFORMS,
    apply_demonym_transform,
    apply_genitive_transform,
    apply_transforms,
)
from ..app import app, console, get_json_mode
from ..utils import Output


@app.command("transform")
def transform_command(
    text: str = typer.Argument(..., help="Input text"),
    apply: list[str] | None = typer.Option(
        None,
        "--apply",
        "-a",
        help=f"Post transform to apply, in order ({', '.join(POST_TRANSFORMS)})",
    ),
    demonym: str | None = typer.Option(
        None, "--demonym", help="Turn a place name into a demonym for LOCALE"
    ),
    genitive: str | None = typer.Option(
        None, "--genitive", help="Turn a name into its genitive for LOCALE"
    ),
):
    """
    Run the transform library on a piece of text.

    Demonym runs first, then genitive, then the --apply transforms.

    Examples:
        nomina transform Hamburg --demonym de
        nomina transform "der herr von und zu" --apply titleCase
        nomina transform Anna --genitive en
    """
    out = Output(console=console, json_mode=get_json_mode())

    result = text
    if demonym:
        result = apply_demonym_transform(result, demonym)
    if genitive:
        result = apply_genitive_transform(result, genitive)
    result = apply_transforms(result, apply)

    out.set_data("input", text)
    out.set_data("output", result)
    out.text(result)
    raise typer.Exit(out.finish())
