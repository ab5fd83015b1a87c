"""
Tests for resource identification
"""
import pytest

from trail_tagger.models import StructuredResourceRef
from trail_tagger.parsing import arn
from trail_tagger.parsing.identity import (
    RESOURCE_IDENTITY_TABLE, identity_from_table, resolve_identities
)
from trail_tagger.parsing.json_path import get_path


def test_get_path_follows_objects_and_arrays(run_instances_event):
    assert get_path(run_instances_event, 'responseElements.instancesSet.items.0.instanceId') == 'i-0123456789abcdef0'
    assert get_path(run_instances_event, 'responseElements.instancesSet.items.1.instanceId') == 'i-0fedcba9876543210'


@pytest.mark.parametrize('path', [
    'responseElements.instancesSet.items.5.instanceId',
    'responseElements.missing',
    'requestParameters.instanceType.deeper',
    'responseElements.instancesSet.items.first',
])
def test_get_path_missing_is_empty(run_instances_event, path):
    assert get_path(run_instances_event, path) == ''


def test_get_path_null_and_non_string_values():
    document = {'a': None, 'b': 3, 'c': True, 'd': {'y': 1, 'x': [2]}}

    assert get_path(document, 'a') == ''
    assert get_path(document, 'b') == '3'
    assert get_path(document, 'c') == 'true'
    assert get_path(document, 'd') == '{"x":[2],"y":1}'


def test_table_is_read_only():
    with pytest.raises(TypeError):
        RESOURCE_IDENTITY_TABLE['DeleteBucket'] = RESOURCE_IDENTITY_TABLE['CreateBucket']


def test_table_covers_original_actions():
    expected = {
        'RunInstances': arn.EC2_INSTANCE,
        'CreateBucket': arn.S3_BUCKET,
        'CreateAutoScalingGroup': arn.AUTOSCALING_GROUP,
        'CreateVpc': arn.EC2_VPC,
        'CreateSubnet': arn.EC2_SUBNET,
        'CreateLoadBalancer': arn.ELB_LOAD_BALANCER,
        'CreateInternetGateway': arn.EC2_INTERNET_GATEWAY,
        'CreateSecurityGroup': arn.EC2_SECURITY_GROUP,
        'CreateNetworkInterface': arn.EC2_NETWORK_INTERFACE,
    }
    for event_name, resource_type in expected.items():
        assert RESOURCE_IDENTITY_TABLE[event_name].resource_type == resource_type


def test_every_table_type_has_an_arn_template():
    for identity in RESOURCE_IDENTITY_TABLE.values():
        assert identity.resource_type in arn.ARN_TEMPLATES


def test_identity_from_table(create_bucket_event, run_instances_event):
    assert identity_from_table(create_bucket_event) == ('s3Bucket', 'my-bucket')
    assert identity_from_table(run_instances_event) == ('ec2Instance', 'i-0123456789abcdef0')


def test_unknown_action_is_dropped(create_bucket_event):
    create_bucket_event['eventName'] = 'UnknownAction'
    assert resolve_identities(create_bucket_event) == []


def test_empty_resource_name_is_dropped(create_bucket_event):
    create_bucket_event['requestParameters'] = {}
    assert resolve_identities(create_bucket_event) == []


def test_structured_refs_take_precedence(create_bucket_event):
    refs = [
        StructuredResourceRef(resource_name='other-bucket', resource_type='AWS::S3::Bucket'),
        StructuredResourceRef(resource_name='', resource_type='AWS::S3::Bucket'),
        StructuredResourceRef(resource_name='i-1', resource_type=''),
        StructuredResourceRef(resource_name='i-2', resource_type='AWS::EC2::Instance'),
    ]

    assert resolve_identities(create_bucket_event, refs) == [
        ('AWS::S3::Bucket', 'other-bucket'),
        ('AWS::EC2::Instance', 'i-2'),
    ]


def test_unusable_refs_fall_back_to_table(create_bucket_event):
    refs = [StructuredResourceRef.from_api({'ResourceType': 'AWS::S3::Bucket'})]
    assert resolve_identities(create_bucket_event, refs) == [('s3Bucket', 'my-bucket')]


def test_structured_ref_from_api():
    ref = StructuredResourceRef.from_api({'ResourceType': 'AWS::EC2::Instance', 'ResourceName': 'i-1'})
    assert ref.usable
    assert not StructuredResourceRef.from_api({'ResourceName': None, 'ResourceType': 'x'}).usable
