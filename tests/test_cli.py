"""
Tests for the trail-tagger command line
"""
import json
from datetime import datetime, timedelta, timezone
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from trail_tagger.cli.main import cli


def json_lines(result):
    return [json.loads(line) for line in result.stdout.splitlines() if line.startswith('{')]


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def no_config(tmp_path):
    return str(tmp_path / 'missing.yaml')


@pytest.fixture
def archive(tmp_path, create_bucket_event, run_instances_event):
    path = tmp_path / 'log.json'
    path.write_text(json.dumps({'Records': [create_bucket_event, run_instances_event]}))
    return str(path)


def test_parse_archive(runner, no_config, archive):
    result = runner.invoke(cli, ['--config', no_config, 'parse', '--input-file', archive])

    assert result.exit_code == 0
    assert [r['TaggingMetadata']['ResourceType'] for r in json_lines(result)] == ['s3Bucket', 'ec2Instance']


def test_parse_archive_with_patterns(runner, no_config, archive):
    result = runner.invoke(cli, [
        '--config', no_config, 'parse', '-f', archive,
        '--tag-pattern', '{Creator: .userIdentity.arn}',
        '--filter-pattern', '.TaggingMetadata.ResourceType == "ec2Instance"'
    ])

    assert result.exit_code == 0
    records = json_lines(result)
    assert len(records) == 1
    assert records[0]['Tags'] == {'Creator': 'arn:aws:iam::123456789012:user/bob'}


def test_config_file_values_are_used(runner, tmp_path, archive):
    config = tmp_path / 'config.yaml'
    config.write_text(
        f'inputFile: {archive}\n'
        'includeEvent: true\n'
        'filterPatterns:\n'
        '  - \'.TaggingMetadata.ResourceName == "my-bucket"\'\n'
    )

    result = runner.invoke(cli, ['--config', str(config), 'parse'])

    assert result.exit_code == 0
    records = json_lines(result)
    assert len(records) == 1
    assert records[0]['Event']['eventName'] == 'CreateBucket'


def test_command_line_overrides_config(runner, tmp_path, archive):
    config = tmp_path / 'config.yaml'
    config.write_text('includeEvent: true\n')

    result = runner.invoke(cli, ['--config', str(config), 'parse', '-f', archive, '--no-include-event'])

    assert result.exit_code == 0
    assert all('Event' not in r for r in json_lines(result))


def test_unreadable_archive_exits_with_error(runner, no_config, tmp_path):
    result = runner.invoke(cli, ['--config', no_config, 'parse', '-f', str(tmp_path / 'nope.json')])

    assert result.exit_code == 1


def test_invalid_config_exits_with_error(runner, tmp_path):
    config = tmp_path / 'config.yaml'
    config.write_text('startHour: soon\n')

    result = runner.invoke(cli, ['--config', str(config), 'parse'])

    assert result.exit_code == 1


@patch('trail_tagger.cli.main.AWSHelper')
def test_parse_live(mock_helper, runner, no_config, create_bucket_event, make_envelope):
    client = mock_helper.return_value.cloudtrail_client.return_value
    client.get_paginator.return_value.paginate.return_value = iter([
        {'Events': [make_envelope(create_bucket_event)]}
    ])

    result = runner.invoke(cli, [
        '--config', no_config, '--region', 'eu-west-1', '--profile', 'audit',
        'parse', '--start-hour', '-4', '--end-hour', '0', '-t', 'AWS::S3::Bucket'
    ])

    assert result.exit_code == 0
    mock_helper.assert_called_once_with('audit')
    mock_helper.return_value.cloudtrail_client.assert_called_once_with('eu-west-1')
    request = client.get_paginator.return_value.paginate.call_args.kwargs
    assert request['LookupAttributes'][0]['AttributeValue'] == 'AWS::S3::Bucket'
    assert json_lines(result)[0]['TaggingMetadata']['ResourceARN'] == 'arn:aws:s3:::my-bucket'


@patch('trail_tagger.cli.main.AWSHelper')
def test_parse_live_inverted_window(mock_helper, runner, no_config):
    result = runner.invoke(cli, ['--config', no_config, 'parse', '--start-hour', '0', '--end-hour', '-4'])

    assert result.exit_code == 0
    assert json_lines(result) == [{'error': 'startHour (0) is at or after endHour (-4)'}]
    mock_helper.return_value.cloudtrail_client.return_value.get_paginator.assert_not_called()


@patch('trail_tagger.cli.main.AWSHelper')
def test_command_line_hours_replace_config_timestamps(mock_helper, runner, tmp_path,
                                                     create_bucket_event, make_envelope):
    config = tmp_path / 'config.yaml'
    config.write_text(
        "startTimeStamp: '2017-01-02T00:00:00Z'\n"
        "endTimeStamp: '2017-01-01T00:00:00Z'\n"
    )
    paginate = mock_helper.return_value.cloudtrail_client.return_value.get_paginator.return_value.paginate
    paginate.return_value = iter([{'Events': [make_envelope(create_bucket_event)]}])

    result = runner.invoke(cli, ['--config', str(config), 'parse', '--start-hour', '-4', '--end-hour', '0'])

    assert result.exit_code == 0
    request = paginate.call_args.kwargs
    assert request['EndTime'] - request['StartTime'] == timedelta(hours=4)
    assert [r.get('error') for r in json_lines(result)] == [None]


@patch('trail_tagger.cli.main.AWSHelper')
def test_command_line_timestamps_replace_config_hours(mock_helper, runner, tmp_path):
    config = tmp_path / 'config.yaml'
    config.write_text('startHour: -8\nendHour: 0\n')
    paginate = mock_helper.return_value.cloudtrail_client.return_value.get_paginator.return_value.paginate
    paginate.return_value = iter([{'Events': []}])

    result = runner.invoke(cli, [
        '--config', str(config), 'parse',
        '--start-timestamp', '2017-06-14T00:00:00Z', '--end-timestamp', '2017-06-15T00:00:00Z'
    ])

    assert result.exit_code == 0
    assert paginate.call_args.kwargs['StartTime'] == datetime(2017, 6, 14, tzinfo=timezone.utc)


def test_non_mapping_logging_section_exits_with_error(runner, tmp_path):
    config = tmp_path / 'config.yaml'
    config.write_text('logging: debug\n')

    result = runner.invoke(cli, ['--config', str(config), 'parse'])

    assert result.exit_code == 1
    assert "'logging' section" in result.output
    assert not isinstance(result.exception, AttributeError)
