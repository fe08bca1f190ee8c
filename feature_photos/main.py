#!/usr/bin/env python3
"""
Feature Photos - Command Line Entry Point

Resolve representative photos for map features from the terminal.

Usage:
    python -m feature_photos.main resolve 14.39052 50.10027 --osm node/123 --tag wikidata=Q243
    python -m feature_photos.main wiki-url --tag wikipedia=cs:Praha
    python -m feature_photos.main probe 14.39052 50.10027
    python -m feature_photos.main status
"""

import asyncio

import click
from loguru import logger
from rich.console import Console
from rich.table import Table

from feature_photos.connectors import SourceRegistry
from feature_photos.connectors.protocols.mediawiki import get_wiki_api_url
from feature_photos.connectors.types import (
    LOADING,
    FullFeature,
    NonOsmFeature,
    OsmMeta,
    SkeletonFeature,
)
from feature_photos.resolver import FeaturePhotoResolver
from feature_photos.utils.geo import normalize_center
from feature_photos.utils.http import JsonFetcher
from feature_photos.utils.osm import OSM_TYPES

console = Console()


def parse_tags(values: tuple[str, ...]) -> dict[str, str]:
    """Parse repeated ``key=value`` options into a tag dict."""
    tags = {}
    for item in values:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"expected key=value, got {item!r}", param_hint="--tag")
        tags[key.strip()] = value.strip()
    return tags


def parse_osm(value: str) -> OsmMeta:
    """Parse ``type/id`` (e.g. ``node/123``) into OsmMeta."""
    osm_type, _, osm_id = value.partition("/")
    if osm_type not in OSM_TYPES or not osm_id.lstrip("-").isdigit():
        raise click.BadParameter(f"expected node|way|relation/<id>, got {value!r}", param_hint="--osm")
    return OsmMeta(type=osm_type, id=int(osm_id))


def print_record(record) -> None:
    if record is LOADING:
        console.print("[yellow]Loading...[/yellow]")
        return
    if record is None:
        console.print("[yellow]No photo found[/yellow]")
        return

    table = Table(show_header=False)
    table.add_column("Field")
    table.add_column("Value")
    for key, value in record.to_dict().items():
        table.add_row(key, str(value))
    console.print(table)


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug logging")
def cli(debug):
    """Feature Photos - representative photos for map features"""
    if debug:
        from feature_photos.utils.logging import setup_logging
        setup_logging(level="DEBUG")


@cli.command()
@click.argument("lon", type=float)
@click.argument("lat", type=float)
@click.option("--tag", "tag_values", multiple=True, help="Feature tag as key=value (repeatable)")
@click.option("--osm", "osm", default="node/0", show_default=True, help="OSM element as type/id")
@click.option("--non-osm", is_flag=True, help="Resolve as a non-OSM feature (Mapillary only)")
@click.option("--two-phase", is_flag=True, help="Resolve the skeleton first, then the full feature")
def resolve(lon: float, lat: float, tag_values: tuple[str, ...], osm: str, non_osm: bool, two_phase: bool):
    """
    Resolve a photo for the feature at LON LAT.
    """
    try:
        center = normalize_center((lon, lat))
    except ValueError as e:
        raise click.BadParameter(str(e)) from e
    tags = parse_tags(tag_values)

    if non_osm:
        features = [NonOsmFeature(center=center, tags=tags)]
    else:
        osm_meta = parse_osm(osm)
        features = [FullFeature(osm_meta=osm_meta, center=center, tags=tags)]
        if two_phase:
            features.insert(0, SkeletonFeature(osm_meta=osm_meta, center=center))

    async def run():
        async with JsonFetcher() as fetcher:
            resolver = FeaturePhotoResolver(fetcher=fetcher)
            for feature in features:
                record = await resolver.resolve(feature)
                console.print(f"\n[bold]{type(feature).__name__}[/bold]")
                print_record(record)

    try:
        asyncio.run(run())
    except Exception as e:
        console.print(f"[red]Photo provider failed: {e}[/red]")
        logger.exception("Resolve failed")
        raise SystemExit(1)


@cli.command("wiki-url")
@click.option("--tag", "tag_values", multiple=True, help="Feature tag as key=value (repeatable)")
def wiki_url(tag_values: tuple[str, ...]):
    """Show the wiki API URL selected for the given tags."""
    url = get_wiki_api_url(parse_tags(tag_values))
    if url is None:
        console.print("[dim]No wikidata, wikimedia_commons or wikipedia tag[/dim]")
    else:
        console.print(url, soft_wrap=True)


@cli.command()
@click.argument("lon", type=float)
@click.argument("lat", type=float)
@click.option("--tag", "tag_values", multiple=True, help="Feature tag as key=value (repeatable)")
def probe(lon: float, lat: float, tag_values: tuple[str, ...]):
    """Query every source independently for the feature at LON LAT."""
    try:
        center = normalize_center((lon, lat))
    except ValueError as e:
        raise click.BadParameter(str(e)) from e
    feature = NonOsmFeature(center=center, tags=parse_tags(tag_values))

    async def run():
        async with JsonFetcher() as fetcher:
            sources = SourceRegistry.create_all(fetcher)
            return await SourceRegistry.probe_all(feature, sources)

    results = asyncio.run(run())

    table = Table()
    table.add_column("Source")
    table.add_column("Status")
    table.add_column("Thumbnail")
    table.add_column("Link")

    for result in results:
        if result.error:
            status = f"[red]Error: {result.error[:40]}[/red]"
        elif result.record is not None and result.record.is_usable:
            status = "[green]Found[/green]"
        else:
            status = "[dim]No photo[/dim]"

        record = result.record
        table.add_row(
            result.source_id,
            status,
            record.thumb if record and record.thumb else "-",
            record.link if record and record.link else "-",
        )

    console.print(table)


@cli.command()
def status():
    """Check connectivity of all photo sources."""
    console.print("\n[bold blue]Feature Photos - Source Status[/bold blue]\n")

    async def run():
        async with JsonFetcher() as fetcher:
            sources = SourceRegistry.create_all(fetcher)
            health = await SourceRegistry.check_all_health(sources)
            return sources, health

    sources, health = asyncio.run(run())

    table = Table()
    table.add_column("Source")
    table.add_column("Name")
    table.add_column("Priority")
    table.add_column("Status")
    table.add_column("Response")

    for source_id, source in sources.items():
        result = health[source_id]
        if result.status == "ok":
            state = "[green]OK[/green]"
        else:
            state = f"[red]{result.error_message or 'Error'}[/red]"

        table.add_row(
            source_id,
            source.source_name,
            str(source.priority),
            state,
            f"{result.response_time_ms:.0f} ms",
        )

    console.print(table)


if __name__ == "__main__":
    cli()
