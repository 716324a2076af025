"""Generate command: run recipes from package files."""

import json
from pathlib import Path

import typer
import yaml

from ...config import get_config
from ...core.errors import NominaError, PackageFormatError
from ...core.models import coerce_where
from ...engine import NominaEngine
from ..app import app, console, get_json_mode
from ..utils import Output, ExitCode, missing_files

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def parse_filters(raw: str | None) -> dict:
    """Parse ``--filters`` JSON into ``{catalog_key: WhereClause}``.

    Raises:
        ValueError: If the JSON is malformed or not an object of where clauses
    """
    if not raw:
        return {}
    data = json.loads(raw)
    if not isinstance(data, dict):
        raise ValueError("--filters must be a JSON object keyed by catalog")
    return {key: coerce_where(where) for key, where in data.items()}


def parse_components(values: list[str] | None) -> dict[str, bool]:
    """Parse repeated ``key=bool`` toggles."""
    components: dict[str, bool] = {}
    for value in values or []:
        key, sep, flag = value.partition("=")
        flag = flag.strip().lower()
        if not sep or not key.strip():
            raise ValueError(f"Invalid component toggle: {value!r} (expected key=bool)")
        if flag in _TRUE:
            components[key.strip()] = True
        elif flag in _FALSE:
            components[key.strip()] = False
        else:
            raise ValueError(f"Invalid boolean for component {key!r}: {flag!r}")
    return components


@app.command("generate")
def generate_command(
    package_files: list[Path] = typer.Argument(
        ...,
        help="Package files (JSON/YAML). The first one is the target package",
    ),
    recipe: list[str] = typer.Option(
        ...,
        "--recipe",
        "-r",
        help="Recipe id to run (repeat to cycle through several)",
    ),
    count: int | None = typer.Option(
        None, "--count", "-n", help="Number of suggestions (default from config)"
    ),
    locale: str | None = typer.Option(
        None, "--locale", "-l", help="Output locale (default from config)"
    ),
    seed: str | None = typer.Option(
        None, "--seed", help="Seed string for reproducible output"
    ),
    allow_duplicates: bool = typer.Option(
        False, "--allow-duplicates", help="Keep suggestions with identical text"
    ),
    filters: str | None = typer.Option(
        None,
        "--filters",
        help='Runtime filters by catalog key, e.g. \'{"cities": {"tags": ["north"]}}\'',
    ),
    component: list[str] | None = typer.Option(
        None,
        "--component",
        "-c",
        help="Component toggle key=bool (repeatable)",
    ),
):
    """
    Generate suggestions from a package.

    All given package files are loaded so recipes can reference catalogs
    of other packages with the ``pkg:catalog`` form.

    EXIT CODES:
        0 = Success
        1 = Validation error
        3 = File not found
        4 = Generation error

    Examples:
        nomina generate names.json -r full -n 5 --seed 42
        nomina generate places.yaml shared.yaml -r town -l de
        nomina generate titles.json -r noble --component title=false
    """
    out = Output(console=console, json_mode=get_json_mode())
    config = get_config()

    missing = missing_files(package_files)
    if missing:
        for path in missing:
            out.error(
                f"Package file not found: {path}", exit_code=ExitCode.FILE_NOT_FOUND
            )
        raise typer.Exit(out.finish())

    try:
        runtime_filters = parse_filters(filters)
        components = parse_components(component)
    except ValueError as e:
        out.error(f"Invalid option: {e}")
        raise typer.Exit(out.finish())

    engine = NominaEngine(config)
    target = None
    for path in package_files:
        try:
            package = engine.load_package_file(path)
        except PackageFormatError as e:
            out.nomina_error(e, exit_code=ExitCode.VALIDATION_ERROR)
            raise typer.Exit(out.finish())
        except (ValueError, yaml.YAMLError) as e:
            out.error(f"Failed to parse {path}: {e}")
            raise typer.Exit(out.finish())
        if target is None:
            target = package

    n = count if count is not None else config.defaults.count
    resolved_locale = locale or config.defaults.locale

    try:
        response = engine.generate(
            target.code,
            n=n,
            locale=resolved_locale,
            recipes=recipe,
            seed=seed,
            allow_duplicates=allow_duplicates,
            filters=runtime_filters,
            components=components,
        )
    except ValueError as e:
        out.error(str(e))
        raise typer.Exit(out.finish())
    except NominaError as e:
        out.nomina_error(e, exit_code=ExitCode.GENERATION_ERROR)
        raise typer.Exit(out.finish())

    for issue in response.errors or []:
        out.warning(f"Attempt {issue.attempt}: {issue.message}")

    if len(response.suggestions) < n:
        out.warning(f"Only generated {len(response.suggestions)}/{n} suggestions")

    if not out.json_mode:
        out.table(
            f"Suggestions ({target.code}, {resolved_locale})",
            ["#", "Text", "Recipe"],
            [
                [str(i), s.text, s.recipe]
                for i, s in enumerate(response.suggestions, start=1)
            ],
            styles=["dim", "bold", "cyan"],
        )
    out.set_data("package", target.code)
    out.set_data("locale", resolved_locale)
    out.set_data(
        "suggestions",
        [
            s.model_dump(mode="json", by_alias=True, exclude_none=True)
            for s in response.suggestions
        ],
    )
    raise typer.Exit(out.finish())
