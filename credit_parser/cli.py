"""
Command line interface for parsing copyright notices.
"""

import json
import sys
from pathlib import Path

import click
import structlog
import yaml

from .config.loader import ConfigLoader
from .core.config import get_settings
from .core.logging import configure_logging
from .extraction.accumulator import CreditAccumulator
from .extraction.patterns import parse_user_pattern
from .relationships.mapper import RelationshipMapper
from .types.common import ConfigError, CreditParserError

logger = structlog.get_logger(__name__)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, verbose):
    """Parse copyright and legal credits into relationship edits."""
    settings = get_settings()
    if verbose:
        settings = settings.model_copy(update={"log_level": "DEBUG"})
    configure_logging(settings)

    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings
    ctx.obj["loader"] = ConfigLoader(
        Path(settings.dialect_dir) if settings.dialect_dir else None,
        Path(settings.vocabulary_dir) if settings.vocabulary_dir else None,
    )


@cli.command()
@click.argument("file", type=click.File("r", encoding="utf-8"), default="-")
@click.option("--dialect", "-d", help="Dialect name or path to a dialect file")
@click.option("--vocabulary", help="Vocabulary name or path to a vocabulary file")
@click.option("--terminator", help="Clause terminator, /regex/flags or literal text")
@click.option("--name-separator", help="Joint credit separator, /regex/flags or literal text")
@click.option("--edits", is_flag=True, help="Print relationship edits instead of items")
@click.option("--entity", help="Release the relationship edits apply to")
@click.option("--artist", "artists", multiple=True, help="Rights holder that is an artist")
@click.option("--force-artist", is_flag=True, help="Treat all rights holders as artists")
@click.option("--recording", "recordings", multiple=True, help="Recording for phonographic credits")
@click.option(
    "--format",
    "-f",
    type=click.Choice(["json", "yaml"]),
    default="json",
    help="Output format",
)
@click.pass_context
def parse(
    ctx,
    file,
    dialect,
    vocabulary,
    terminator,
    name_separator,
    edits,
    entity,
    artists,
    force_artist,
    recordings,
    format,
):
    """Parse a copyright notice from FILE or standard input."""
    if edits and not entity:
        raise click.UsageError("--edits needs an --entity reference")

    settings = ctx.obj["settings"]
    loader = ctx.obj["loader"]

    try:
        config = loader.load_dialect(dialect or settings.dialect)
        if terminator or name_separator:
            config = config.with_overrides(
                terminator=parse_user_pattern(terminator) if terminator else None,
                name_separator=parse_user_pattern(name_separator) if name_separator else None,
            )

        items = CreditAccumulator(config).parse(file.read())

        if edits:
            mapper = RelationshipMapper(loader.load_vocabulary(vocabulary or settings.vocabulary))
            result = [
                edit.to_dict()
                for edit in mapper.to_relationship_edits(
                    items,
                    entity,
                    artist_names=artists,
                    force_artist=force_artist,
                    recording_refs=recordings,
                )
            ]
        else:
            result = [item.to_dict() for item in items]

    except CreditParserError as e:
        logger.error("Parsing failed", error=str(e), error_type=type(e).__name__)
        click.echo(f"❌ {e}", err=True)
        sys.exit(1)

    _print_result(result, format)


@cli.command()
@click.option("--dialect", "-d", help="Dialect name or path to a dialect file")
@click.option("--vocabulary", help="Vocabulary name or path to a vocabulary file")
@click.pass_context
def validate(ctx, dialect, vocabulary):
    """Validate a dialect and a vocabulary."""
    settings = ctx.obj["settings"]
    loader = ctx.obj["loader"]
    dialect = dialect or settings.dialect
    vocabulary = vocabulary or settings.vocabulary

    click.echo(f"🔍 Validating dialect '{dialect}' and vocabulary '{vocabulary}'...")

    if dialect not in loader.available_dialects() and not Path(dialect).is_file():
        click.echo(f"❌ Dialect not found: {dialect}")
        sys.exit(1)

    try:
        loader.load_dialect(dialect)
        loader.load_vocabulary(vocabulary)
    except ConfigError as e:
        click.echo(f"❌ {e}")
        sys.exit(1)

    click.echo("✅ Configuration is valid")


@cli.command()
@click.pass_context
def list_configs(ctx):
    """List available dialects and vocabularies."""
    loader = ctx.obj["loader"]

    click.echo("📋 Dialects:")
    for name in loader.available_dialects():
        click.echo(f"  {name}")

    click.echo("📋 Vocabularies:")
    for name in loader.available_vocabularies():
        click.echo(f"  {name}")


def _print_result(result, format):
    if format == "json":
        click.echo(json.dumps(result, indent=2, ensure_ascii=False))
    else:
        click.echo(
            yaml.safe_dump(result, allow_unicode=True, sort_keys=False, default_flow_style=False)
        )


if __name__ == "__main__":
    cli()
