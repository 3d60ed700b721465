"""Command-line interface for Mise."""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Any, List, Optional

import typer
from pydantic import BaseModel, TypeAdapter, ValidationError

from mise.config import ConfigurationError, get_settings
from mise.logging_utils import configure_logging
from mise.matching import check_recipe_availability, parse_ingredients_from_recipe
from mise.models.pantry import PantryItem
from mise.models.recipe import SavedRecipe
from mise.models.results import DateRange, RecipeFilters
from mise.recipes import (
    extract_all_tags,
    extract_recipe,
    filter_recipes,
    score_recipe_content,
    validate_recipe,
)
from mise.safety import filter_recipes as safety_filter

app = typer.Typer(help="Ingredient matching and recipe safety commands.")

_RECIPES = TypeAdapter(List[SavedRecipe])
_PANTRY = TypeAdapter(List[PantryItem])

SORT_CHOICES = ("date-desc", "date-asc", "name-asc", "name-desc", "time-asc", "time-desc")


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        typer.secho(f"Unable to read {path}: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc


def _load(adapter: TypeAdapter, path: Path) -> Any:
    try:
        return adapter.validate_json(_read_text(path))
    except ValidationError as exc:
        typer.secho(f"Invalid data in {path}:\n{exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc


def _emit(payload: Any, pretty: bool) -> None:
    if isinstance(payload, BaseModel):
        payload = payload.model_dump(mode="json", by_alias=True)
    elif isinstance(payload, list):
        payload = [
            item.model_dump(mode="json", by_alias=True) if isinstance(item, BaseModel) else item
            for item in payload
        ]
    typer.echo(json.dumps(payload, indent=2 if pretty else None, sort_keys=pretty))


@app.callback()
def main_callback() -> None:
    """Configure logging from settings before any command runs."""

    settings = get_settings()
    configure_logging(settings.log_level, settings.log_format)


@app.command()
def parse(
    recipe_path: Path = typer.Argument(..., help="Recipe text file."),
    pretty: bool = typer.Option(False, "--pretty", help="Pretty-print output JSON."),
) -> None:
    """Print the ingredients parsed from a recipe text file."""

    ingredients = parse_ingredients_from_recipe(_read_text(recipe_path))
    if not ingredients:
        typer.secho("Could not identify any ingredients.", fg=typer.colors.YELLOW, err=True)
    _emit(ingredients, pretty)


@app.command()
def detect(
    text_path: Path = typer.Argument(..., help="Message text file."),
    pretty: bool = typer.Option(False, "--pretty", help="Pretty-print output JSON."),
) -> None:
    """Score a message and report whether it looks like a recipe."""

    score = score_recipe_content(_read_text(text_path))
    threshold = get_settings().recipe_detection_threshold
    payload = score.model_dump(mode="json", by_alias=True)
    payload.update({"total": score.total, "threshold": threshold, "isRecipe": score.total >= threshold})
    _emit(payload, pretty)


@app.command()
def extract(
    recipe_path: Path = typer.Argument(..., help="Recipe text file."),
    pretty: bool = typer.Option(True, "--pretty/--no-pretty", help="Pretty-print output JSON."),
) -> None:
    """Extract a structured recipe and its validation report."""

    recipe = extract_recipe(_read_text(recipe_path))
    _emit(
        {
            "recipe": recipe.model_dump(mode="json", by_alias=True),
            "validation": validate_recipe(recipe).model_dump(mode="json", by_alias=True),
        },
        pretty,
    )


@app.command()
def compare(
    recipe_path: Path = typer.Argument(..., help="Recipe text file."),
    pantry_path: Path = typer.Argument(..., help="Pantry JSON array."),
    owner: Optional[str] = typer.Option(None, "--owner", help="Only match pantry items of this owner."),
    pretty: bool = typer.Option(False, "--pretty", help="Pretty-print output JSON."),
) -> None:
    """Compare a recipe's ingredients with a pantry snapshot."""

    pantry = _load(_PANTRY, pantry_path)
    report = check_recipe_availability(_read_text(recipe_path), pantry, owner_id=owner)
    if not report.parsed:
        typer.secho("Could not identify any ingredients.", fg=typer.colors.YELLOW, err=True)
    _emit(report, pretty)


@app.command()
def scan(
    recipes_path: Path = typer.Argument(..., help="Saved recipes JSON array."),
    allergen: List[str] = typer.Option([], "--allergen", "-a", help="Allergen to exclude."),
    diet: List[str] = typer.Option([], "--diet", "-d", help="Dietary restriction to enforce."),
    pretty: bool = typer.Option(False, "--pretty", help="Pretty-print output JSON."),
) -> None:
    """Drop recipes containing allergens or violating dietary restrictions."""

    recipes = _load(_RECIPES, recipes_path)
    try:
        result = safety_filter(recipes, allergen, diet)
    except ConfigurationError as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc
    _emit(result, pretty)


@app.command("filter")
def filter_command(
    recipes_path: Path = typer.Argument(..., help="Saved recipes JSON array."),
    search: str = typer.Option("", "--search", "-s", help="Search title, notes, ingredients and tags."),
    tag: List[str] = typer.Option([], "--tag", "-t", help="Required tag (repeatable)."),
    date_from: Optional[datetime] = typer.Option(None, "--from", help="Created on or after."),
    date_to: Optional[datetime] = typer.Option(None, "--to", help="Created on or before."),
    sort: str = typer.Option("date-desc", "--sort", help=f"One of: {', '.join(SORT_CHOICES)}."),
    allergen: List[str] = typer.Option([], "--allergen", "-a", help="Allergen to exclude."),
    diet: List[str] = typer.Option([], "--diet", "-d", help="Dietary restriction to enforce."),
    pretty: bool = typer.Option(False, "--pretty", help="Pretty-print output JSON."),
) -> None:
    """Search, filter and sort a saved recipe collection."""

    if sort not in SORT_CHOICES:
        typer.secho(f"Unknown sort option {sort!r}.", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    recipes = _load(_RECIPES, recipes_path)
    date_range = None
    if date_from or date_to:
        date_range = DateRange(from_=date_from, to=date_to)
    filters = RecipeFilters(
        search_query=search,
        selected_tags=tag,
        date_range=date_range,
        sort_by=sort,
        allergens=allergen,
        dietary_restrictions=diet,
    )
    try:
        result = filter_recipes(recipes, filters)
    except ConfigurationError as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc
    _emit(result, pretty)


@app.command()
def tags(
    recipes_path: Path = typer.Argument(..., help="Saved recipes JSON array."),
) -> None:
    """List every distinct tag in a recipe collection."""

    _emit(extract_all_tags(_load(_RECIPES, recipes_path)), False)


def main(argv: Optional[list[str]] = None) -> None:
    """Entry point for the ``mise`` console script."""
    app(prog_name="mise", args=argv)


if __name__ == "__main__":
    main()
