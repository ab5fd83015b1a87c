import click
import logging

from ..config import DEFAULT_CONFIG_PATH, ParseSettings, load_config
from ..exceptions import ArchiveError, ConfigError, EventLookupError
from ..parsing.pipeline import EventProcessor
from ..sources.archive import archive_lines
from ..sources.cloudtrail_lookup import lookup_lines
from ..utils.aws import AWSHelper
from ..utils.logging_config import setup_logging


logger = logging.getLogger(__name__)


@click.group()
@click.option('--config', '-c', type=click.Path(dir_okay=False), default=DEFAULT_CONFIG_PATH,
              help='Path to configuration file')
@click.option('--profile', '-p', help='AWS profile to use')
@click.option('--region', '-r', help='AWS region to read CloudTrail events from')
@click.option('--log-level', type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
              help='Logging level (logs are written to stderr)')
@click.option('--log-format', type=click.Choice(['console', 'json', 'detailed']),
              help='Log output format')
@click.pass_context
def cli(ctx, config, profile, region, log_level, log_format):
    """trail-tagger - Derive resource tags from CloudTrail events"""
    ctx.ensure_object(dict)

    try:
        ctx.obj['config'] = load_config(config)
    except ConfigError as e:
        raise click.ClickException(str(e))

    logging_config = ctx.obj['config'].pop('logging', None) or {}
    setup_logging(
        log_level=log_level or logging_config.get('level', 'WARNING'),
        log_file=logging_config.get('file'),
        log_format=log_format or logging_config.get('format', 'console')
    )

    # Override with command line options
    if profile:
        ctx.obj['config']['profile'] = profile
    if region:
        ctx.obj['config']['region'] = region


@cli.command()
@click.option('--input-file', '-f', type=click.Path(dir_okay=False),
              help='CloudTrail log file of raw CloudTrail events (.json or .json.gz)')
@click.option('--start-timestamp', help='RFC3339 start of the lookup window')
@click.option('--end-timestamp', help='RFC3339 end of the lookup window')
@click.option('--start-hour', type=int, help='Start of the lookup window in hours relative to now')
@click.option('--end-hour', type=int, help='End of the lookup window in hours relative to now')
@click.option('--resource-type', '-t', 'resource_types', multiple=True,
              help='CloudTrail resource type to look up (repeatable)')
@click.option('--tag-pattern', 'tag_patterns', multiple=True, help='jq tag pattern (repeatable)')
@click.option('--filter-pattern', 'filter_patterns', multiple=True, help='jq filter pattern (repeatable)')
@click.option('--include-event/--no-include-event', default=None,
              help='Include the CloudTrail event in each output record')
@click.pass_context
def parse(ctx, input_file, start_timestamp, end_timestamp, start_hour, end_hour,
          resource_types, tag_patterns, filter_patterns, include_event):
    """Parse CloudTrail events and output tagging data for created resources.

    By default events are read from the CloudTrail LookupEvents API of the
    configured account. With --input-file a CloudTrail log file is read instead.
    """
    try:
        settings = ParseSettings.from_dict(ctx.obj['config'])
    except ConfigError as e:
        raise click.ClickException(str(e))

    settings = settings.with_overrides(
        input_file=input_file,
        start_timestamp=start_timestamp,
        end_timestamp=end_timestamp,
        start_hour=start_hour,
        end_hour=end_hour,
        resource_types=list(resource_types) or None,
        tag_patterns=list(tag_patterns) or None,
        filter_patterns=list(filter_patterns) or None,
        include_event=include_event
    )

    processor = EventProcessor.from_settings(settings)

    try:
        if settings.input_file:
            lines = archive_lines(settings.input_file, processor)
        else:
            client = AWSHelper(settings.profile).cloudtrail_client(settings.region)
            lines = lookup_lines(client, processor, settings)

        for line in lines:
            click.echo(line)
    except (ArchiveError, EventLookupError) as e:
        logger.error(str(e))
        raise click.ClickException(str(e))


if __name__ == '__main__':
    cli()
