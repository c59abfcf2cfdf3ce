#!/usr/bin/env python3
"""Command-line interface for generating trading cards from photos."""

import json
from pathlib import Path
from typing import List, Optional

import typer

from .client import generate_card
from .config import DEFAULT_TEMPERATURE
from .errors import GenerationError
from .keys import check_api_key
from .summary import card_summary


app = typer.Typer(help="Turn photos into trading cards.")

SUPPORTED_SUFFIXES = [".png", ".webp", ".jpg", ".jpeg"]


def clean_filename(name: str) -> str:
    """Turn a card name into a safe filename."""
    safe = "".join(c for c in name if c.isalnum() or c in (" ", "-", "_"))
    safe = "_".join(safe.strip().split())
    return safe or "card"


def _collect_images(target_path: Path, supported: List[str]) -> List[Path]:
    if target_path.is_dir():
        image_files = [p for p in target_path.iterdir() if p.suffix.lower() in supported]
        if not image_files:
            typer.echo("No supported image files found in directory.")
            raise typer.Exit(code=1)
        image_files.sort()
        return image_files

    if target_path.suffix.lower() not in supported:
        raise typer.BadParameter(f"Unsupported file type: {target_path.suffix}", param_name="path")
    return [target_path]


@app.command()
def generate(
    path: Path = typer.Argument(..., help="Path to an image or a folder."),
    api_key: Optional[str] = typer.Option(
        None, "--api-key", help="API key to use instead of the one in the environment."
    ),
    out_dir: Path = typer.Option(
        Path("output"),
        "--out-dir",
        help="Directory where card JSON files will be stored.",
    ),
    model: Optional[str] = typer.Option(
        None, "--model", help="Model to use (default: $SNAPCARD_MODEL or gpt-4o)."
    ),
    temperature: float = typer.Option(
        DEFAULT_TEMPERATURE, "--temperature", help="Sampling temperature for the model."
    ),
    base_url: Optional[str] = typer.Option(
        None, "--base-url", help="OpenAI-compatible endpoint (default: $SNAPCARD_BASE_URL)."
    ),
    print_json: bool = typer.Option(
        False, "--print", help="Print card JSON to stdout after writing.", show_default=False
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Generate cards without writing JSON files to disk.", show_default=False
    ),
) -> None:
    """Generate one card per image."""

    target_path = path.expanduser().resolve()
    if not target_path.exists():
        raise typer.BadParameter(f"Path not found: {target_path}", param_name="path")

    image_files = _collect_images(target_path, SUPPORTED_SUFFIXES)

    resolved_out_dir = out_dir.expanduser().resolve()
    if not dry_run:
        resolved_out_dir.mkdir(parents=True, exist_ok=True)

    failures = 0
    for image_path in image_files:
        typer.echo(f"\nProcessing: {image_path}")

        try:
            card = generate_card(
                image_path,
                api_key,
                model=model,
                temperature=temperature,
                base_url=base_url,
            )
        except GenerationError as exc:
            typer.echo(f"  ERROR while processing {image_path.name} ({type(exc).__name__}): {exc}")
            failures += 1
            continue

        card_payload = card.to_payload()
        summary = card_summary(card)
        typer.echo(
            f"  {card.rarity.value} {card.category.value}: {card.name} "
            f"(Total Power {summary.total_power}, {summary.meme_tier})"
        )

        if print_json or dry_run:
            typer.echo(json.dumps(card_payload, indent=2, ensure_ascii=False))

        if dry_run:
            typer.echo("  Dry run enabled, file not written.")
            continue

        out_path = resolved_out_dir / (clean_filename(card.name) + ".json")
        try:
            with out_path.open("w", encoding="utf-8") as f:
                json.dump(card_payload, f, indent=2, ensure_ascii=False)
            typer.echo(f"  Saved: {out_path}")
        except OSError as exc:
            typer.echo(f"  ERROR while writing {out_path}: {exc}")
            failures += 1

    if failures:
        raise typer.Exit(code=1)


@app.command("check-key")
def check_key(
    api_key: str = typer.Argument(..., help="API key to test."),
    base_url: Optional[str] = typer.Option(
        None, "--base-url", help="OpenAI-compatible endpoint (default: $SNAPCARD_BASE_URL)."
    ),
) -> None:
    """Check that an API key can reach the model provider."""

    if check_api_key(api_key, base_url=base_url):
        typer.echo("API key is valid.")
        return

    typer.echo("API key is not valid.")
    raise typer.Exit(code=1)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
