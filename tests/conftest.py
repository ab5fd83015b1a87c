"""
Shared CloudTrail event fixtures
"""
import json
from datetime import datetime, timezone

import pytest


@pytest.fixture
def create_bucket_event():
    return {
        'eventVersion': '1.05',
        'userIdentity': {
            'type': 'IAMUser',
            'arn': 'arn:aws:iam::123:user/alice',
            'accountId': '123'
        },
        'eventTime': '2017-06-14T12:00:00Z',
        'eventSource': 's3.amazonaws.com',
        'eventName': 'CreateBucket',
        'awsRegion': 'us-east-1',
        'requestParameters': {'bucketName': 'my-bucket'},
        'responseElements': None,
        'eventID': 'e1'
    }


@pytest.fixture
def run_instances_event():
    return {
        'eventVersion': '1.05',
        'userIdentity': {
            'type': 'IAMUser',
            'arn': 'arn:aws:iam::123456789012:user/bob',
            'accountId': '123456789012',
            'userName': 'bob'
        },
        'eventTime': '2017-06-14T13:00:00Z',
        'eventSource': 'ec2.amazonaws.com',
        'eventName': 'RunInstances',
        'awsRegion': 'us-west-2',
        'recipientAccountId': '123456789012',
        'requestParameters': {
            'instanceType': 't2.micro',
            'tagSpecificationSet': {
                'items': [{
                    'resourceType': 'instance',
                    'tags': [
                        {'key': 'Environment', 'value': 'dev'},
                        {'key': 'Owner', 'value': 'bob'}
                    ]
                }]
            }
        },
        'responseElements': {
            'instancesSet': {
                'items': [
                    {'instanceId': 'i-0123456789abcdef0'},
                    {'instanceId': 'i-0fedcba9876543210'}
                ]
            }
        },
        'eventID': 'e2'
    }


@pytest.fixture
def make_envelope():
    """Build a LookupEvents `Event` wrapping a raw event"""
    def _make(raw_event, resources=None):
        return {
            'EventId': raw_event.get('eventID', 'id'),
            'EventName': raw_event.get('eventName', ''),
            'ReadOnly': 'false',
            'EventTime': datetime(2017, 6, 14, 12, 0, tzinfo=timezone.utc),
            'EventSource': raw_event.get('eventSource', ''),
            'Username': raw_event.get('userIdentity', {}).get('userName', ''),
            'Resources': resources or [],
            'CloudTrailEvent': json.dumps(raw_event)
        }
    return _make
