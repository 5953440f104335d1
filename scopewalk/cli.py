"""CLI — click-based command-line interface."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from scopewalk.config import load_markup_config
from scopewalk.report import filter_blocks, render_json, render_text
from scopewalk.scanner.scanner import scan_file
from scopewalk.scanner.scopes import ScopeTables


@click.group()
@click.option("-v", "--verbose", is_flag=True, default=False,
              help="Log debug output to stderr.")
def main(verbose: bool) -> None:
    """scopewalk — scoped, line-mapped text blocks from rendered markup."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


# ───────────────────────────────────────────────────────────────────
# blocks
# ───────────────────────────────────────────────────────────────────

@main.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--html", "html_path", default=None,
              type=click.Path(exists=True, dir_okay=False),
              help="Pre-rendered HTML for PATH (required for .rst/.adoc).")
@click.option("--config", "config_path", default=None,
              type=click.Path(exists=True, dir_okay=False),
              help="Explicit config file (skips .scopewalk.yml lookup).")
@click.option("--format", "fmt", default="text",
              type=click.Choice(["text", "json"], case_sensitive=False),
              help="Output format.")
@click.option("--scope", "scopes", multiple=True,
              help="Only show blocks whose scope starts with this prefix (repeatable).")
@click.option("--offset", default=0, type=int,
              help="Line offset of PATH within an enclosing file.")
@click.option("--all", "show_all", is_flag=True, default=False,
              help="Include the summary and raw document blocks in text output.")
def blocks(
    path: str,
    html_path: str | None,
    config_path: str | None,
    fmt: str,
    scopes: tuple[str, ...],
    offset: int,
    show_all: bool,
) -> None:
    """Print the blocks scanned from a document."""
    target = Path(path).resolve()
    cfg = load_markup_config(scan_path=str(target.parent), config_path=config_path)

    html = None
    if html_path is not None:
        html = Path(html_path).read_text(encoding="utf-8", errors="replace")

    try:
        collected = scan_file(target, config=cfg, html=html, offset=offset)
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc

    shown = filter_blocks(collected.blocks, scopes)
    if fmt == "json":
        click.echo(render_json(str(target), shown))
    else:
        click.echo(render_text(str(target), shown, show_document=show_all))


# ───────────────────────────────────────────────────────────────────
# scopes
# ───────────────────────────────────────────────────────────────────

@main.command("scopes")
@click.option("--config", "config_path", default=None,
              type=click.Path(exists=True, dir_okay=False),
              help="Explicit config file (skips .scopewalk.yml lookup).")
def scopes_cmd(config_path: str | None) -> None:
    """Show the effective tag classification tables."""
    cfg = load_markup_config(scan_path=str(Path.cwd()), config_path=config_path)
    tables = ScopeTables.from_config(cfg)

    click.echo(f"{'Tag':<12} {'Scope':<20} {'Inline'}")
    click.echo("-" * 40)
    for tag, scope in sorted(tables.tag_to_scope.items()):
        inline = "yes" if tables.is_inline(tag) else "no"
        click.echo(f"{tag:<12} {scope:<20} {inline}")
    click.echo("")
    click.echo(f"Skipped tags:    {', '.join(sorted(tables.skip_tags))}")
    click.echo(f"Masked tags:     {', '.join(sorted(tables.skip_content_tags))}")
    click.echo(f"Skipped classes: {', '.join(sorted(tables.skip_classes))}")
