"""docindex CLI - list, look up and paginate markdown content."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import click

from docindex.config import AppConfig, load_config, load_env_production, resolve_path
from docindex.content.query import collect_docs, get_doc_by_slug, get_doc_meta_by_slug
from docindex.domain.pagination import compute_pagination
from docindex.exceptions import ConfigurationError


def _echo_json(payload) -> None:
    click.echo(json.dumps(payload, indent=2, ensure_ascii=False, default=str))


def _content_root(ctx: click.Context) -> Path:
    return ctx.obj["content_root"]


def _config(ctx: click.Context) -> AppConfig:
    return ctx.obj["config"]


@click.group()
@click.option("--config", "-c", default=None, help="Configuration file path (YAML or JSON)")
@click.option("--root", "-r", default=None, help="Content root directory (overrides config)")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, config: str | None, root: str | None, verbose: bool):
    """docindex - content directory indexer for static site builds."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        cfg = load_env_production(load_config(config))
    except (FileNotFoundError, ConfigurationError) as e:
        click.echo(f"✗ Configuration error: {e}", err=True)
        raise click.Abort()

    ctx.obj = {
        "config": cfg,
        "content_root": resolve_path(root or cfg.content.root),
    }


@cli.command("list")
@click.argument("search_path", default="")
@click.option("--filter", "filter_json", default=None, help='Filter as JSON, e.g. \'{"draft": true}\'')
@click.option("--limit", default=0, type=int, help="Maximum number of documents")
@click.option("--asc", is_flag=True, help="Oldest first")
@click.option("--full", is_flag=True, help="Include body content")
@click.option("--hide-drafts", is_flag=True, help="Hide drafts in production builds")
@click.option("--production", is_flag=True, help="Treat this as a production build")
@click.pass_context
def list_docs(
    ctx: click.Context,
    search_path: str,
    filter_json: str | None,
    limit: int,
    asc: bool,
    full: bool,
    hide_drafts: bool,
    production: bool,
):
    """List documents under SEARCH_PATH, newest first."""
    cfg = _config(ctx)

    filters = None
    if filter_json:
        try:
            filters = json.loads(filter_json)
        except json.JSONDecodeError as e:
            raise click.BadParameter(f"invalid JSON ({e})", param_hint="--filter")

    overrides = {"filters": filters}
    if asc:
        overrides["order"] = "asc"
    if full:
        overrides["meta_only"] = False
    if hide_drafts:
        overrides["hide_drafts"] = True
    if production:
        overrides["production"] = True

    batch = collect_docs(search_path, cfg.query_options(**overrides), _content_root(ctx))
    if batch.error is not None:
        click.echo(f"✗ {batch.error}", err=True)
        ctx.exit(1)

    # The crawler does not filter by extension; do it here.
    extensions = {ext.lower() for ext in cfg.content.extensions}
    docs = [doc for doc in batch.docs if not extensions or Path(doc.path).suffix.lower() in extensions]
    if limit:
        docs = docs[:limit]

    _echo_json([doc.to_dict() for doc in docs])


@cli.command()
@click.argument("slug")
@click.option("--base", default="", help="Directory inside the content root to search")
@click.option("--meta-only", is_flag=True, help="Clear the body content")
@click.pass_context
def show(ctx: click.Context, slug: str, base: str, meta_only: bool):
    """Show a single document by SLUG."""
    cfg = _config(ctx)
    lookup = get_doc_meta_by_slug if meta_only else get_doc_by_slug
    doc = lookup(slug, base, cfg.production, _content_root(ctx))
    if doc is None:
        click.echo(f"✗ Document not found: {slug}", err=True)
        ctx.exit(1)

    _echo_json(doc.to_dict())


@cli.command()
@click.argument("count", type=int)
@click.option("--page", default="1", help="Current page (route parameter)")
@click.option("--per-page", default=None, type=int, help="Items per page (overrides config)")
@click.pass_context
def paginate(ctx: click.Context, count: int, page: str, per_page: int | None):
    """Compute the pagination descriptor for COUNT items."""
    cfg = _config(ctx)
    pagination = compute_pagination(count, page, per_page if per_page is not None else cfg.query.per_page)
    if pagination is None:
        click.echo("✗ Invalid pagination parameters", err=True)
        ctx.exit(1)

    _echo_json(pagination.to_dict())


@cli.command()
@click.pass_context
def validate(ctx: click.Context):
    """Validate configuration file."""
    cfg = _config(ctx)
    click.echo("✓ Configuration is valid")
    click.echo(f"  Content root: {_content_root(ctx)}")
    click.echo(f"  Extensions: {', '.join(cfg.content.extensions)}")
    click.echo(f"  Sort order: {cfg.query.order}")
    click.echo(f"  Per page: {cfg.query.per_page}")
    click.echo(f"  Production: {cfg.production}")


def main():
    """CLI entry point."""
    cli()


if __name__ == "__main__":
    main()
