"""Inspect command: summarize the contents of a package file."""

from pathlib import Path

import typer
import yaml

from ...core.errors import PackageFormatError
from ...engine import NominaEngine
from ..app import app, console, get_json_mode
from ..utils import Output, ExitCode


@app.command("inspect")
def inspect_command(
    package_file: Path = typer.Argument(..., help="Package file (JSON/YAML)"),
    locale: str = typer.Option(
        "en", "--locale", "-l", help="Locale for display names"
    ),
):
    """
    Show the recipes, catalogs and collections of a package.

    Examples:
        nomina inspect names.json
        nomina --json inspect places.yaml -l de
    """
    out = Output(console=console, json_mode=get_json_mode())

    if not package_file.exists():
        out.error(
            f"Package file not found: {package_file}",
            exit_code=ExitCode.FILE_NOT_FOUND,
        )
        raise typer.Exit(out.finish())

    engine = NominaEngine()
    try:
        package = engine.load_package_file(package_file)
    except PackageFormatError as e:
        out.nomina_error(e, exit_code=ExitCode.VALIDATION_ERROR)
        raise typer.Exit(out.finish())
    except (ValueError, yaml.YAMLError) as e:
        out.error(f"Failed to parse {package_file}: {e}")
        raise typer.Exit(out.finish())

    out.header(f"PACKAGE: {package.code} (format {package.format})")
    out.set_data("package", package.code)
    out.set_data("languages", package.package.languages)
    out.text(f"Languages: {', '.join(package.package.languages)}")
    if package.output.transforms:
        out.text(f"Output transforms: {', '.join(package.output.transforms)}")
    out.blank()

    out.table(
        "Recipes",
        ["ID", "Name", "Kind", "Post"],
        [
            [
                entry["id"],
                entry["displayName"],
                "pattern" if recipe.pattern is not None else "oneOf",
                ", ".join(recipe.post),
            ]
            for entry, recipe in zip(
                engine.get_available_recipes(package.code, locale), package.recipes
            )
        ],
        styles=["cyan"],
    )

    out.table(
        "Catalogs",
        ["Key", "Name", "Items"],
        [
            [entry["key"], entry["displayName"], str(len(catalog.items))]
            for entry, catalog in zip(
                engine.get_available_catalogs(package.code, locale),
                package.catalogs.values(),
            )
        ],
        styles=["cyan"],
    )

    collections = engine.get_available_collections(package.code, locale)
    if collections or out.json_mode:
        out.table(
            "Collections",
            ["Key", "Name", "Recipes"],
            [
                [entry["key"], entry["displayName"], ", ".join(entry["recipes"])]
                for entry in collections
            ],
            styles=["cyan"],
        )

    raise typer.Exit(out.finish())
