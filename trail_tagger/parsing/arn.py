"""
ARN synthesis for resources identified in CloudTrail events

Resource types are accepted either as the short names used by the event
identity table (`ec2Instance`, `s3Bucket`, ...) or as the CloudTrail
`AWS::Service::Type` names found in LookupEvents `Resources` entries.
"""
import logging
from typing import Any, Callable, Dict

from .json_path import get_path


logger = logging.getLogger(__name__)

AUTOSCALING_GROUP = 'autoScalingGroup'
AUTOSCALING_LAUNCH_CONFIGURATION = 'launchConfiguration'
DYNAMODB_TABLE = 'dynamoDbTable'
EC2_CUSTOMER_GATEWAY = 'ec2CustomerGateway'
EC2_EIP = 'ec2Eip'
EC2_IMAGE = 'ec2Image'
EC2_INSTANCE = 'ec2Instance'
EC2_INTERNET_GATEWAY = 'ec2InternetGateway'
EC2_NAT_GATEWAY = 'ec2NatGateway'
EC2_NETWORK_ACL = 'ec2NetworkAcl'
EC2_NETWORK_INTERFACE = 'ec2NetworkInterface'
EC2_ROUTE_TABLE = 'ec2RouteTable'
EC2_SECURITY_GROUP = 'ec2SecurityGroup'
EC2_SNAPSHOT = 'ec2Snapshot'
EC2_SUBNET = 'ec2Subnet'
EC2_VOLUME = 'ec2Volume'
EC2_VPC = 'ec2Vpc'
EC2_VPN_GATEWAY = 'ec2VpnGateway'
ELB_LOAD_BALANCER = 'elasticLoadBalancingLoadBalancer'
IAM_INSTANCE_PROFILE = 'iamInstanceProfile'
IAM_ROLE = 'iamRole'
IAM_USER = 'iamUser'
KMS_KEY = 'kmsKey'
LAMBDA_FUNCTION = 'lambdaFunction'
RDS_DB_INSTANCE = 'rdsDbInstance'
ROUTE53_HOSTED_ZONE = 'route53HostedZone'
S3_BUCKET = 's3Bucket'
SNS_TOPIC = 'snsTopic'

ARN_TEMPLATES = {
    AUTOSCALING_GROUP: 'arn:{partition}:autoscaling:{region}:{account}:autoScalingGroup:*:autoScalingGroupName/{name}',
    AUTOSCALING_LAUNCH_CONFIGURATION: 'arn:{partition}:autoscaling:{region}:{account}:launchConfiguration:*:launchConfigurationName/{name}',
    DYNAMODB_TABLE: 'arn:{partition}:dynamodb:{region}:{account}:table/{name}',
    EC2_CUSTOMER_GATEWAY: 'arn:{partition}:ec2:{region}:{account}:customer-gateway/{name}',
    EC2_EIP: 'arn:{partition}:ec2:{region}:{account}:elastic-ip/{name}',
    EC2_IMAGE: 'arn:{partition}:ec2:{region}::image/{name}',
    EC2_INSTANCE: 'arn:{partition}:ec2:{region}:{account}:instance/{name}',
    EC2_INTERNET_GATEWAY: 'arn:{partition}:ec2:{region}:{account}:internet-gateway/{name}',
    EC2_NAT_GATEWAY: 'arn:{partition}:ec2:{region}:{account}:natgateway/{name}',
    EC2_NETWORK_ACL: 'arn:{partition}:ec2:{region}:{account}:network-acl/{name}',
    EC2_NETWORK_INTERFACE: 'arn:{partition}:ec2:{region}:{account}:network-interface/{name}',
    EC2_ROUTE_TABLE: 'arn:{partition}:ec2:{region}:{account}:route-table/{name}',
    EC2_SECURITY_GROUP: 'arn:{partition}:ec2:{region}:{account}:security-group/{name}',
    EC2_SNAPSHOT: 'arn:{partition}:ec2:{region}::snapshot/{name}',
    EC2_SUBNET: 'arn:{partition}:ec2:{region}:{account}:subnet/{name}',
    EC2_VOLUME: 'arn:{partition}:ec2:{region}:{account}:volume/{name}',
    EC2_VPC: 'arn:{partition}:ec2:{region}:{account}:vpc/{name}',
    EC2_VPN_GATEWAY: 'arn:{partition}:ec2:{region}:{account}:vpn-gateway/{name}',
    ELB_LOAD_BALANCER: 'arn:{partition}:elasticloadbalancing:{region}:{account}:loadbalancer/{name}',
    IAM_INSTANCE_PROFILE: 'arn:{partition}:iam::{account}:instance-profile/{name}',
    IAM_ROLE: 'arn:{partition}:iam::{account}:role/{name}',
    IAM_USER: 'arn:{partition}:iam::{account}:user/{name}',
    KMS_KEY: 'arn:{partition}:kms:{region}:{account}:key/{name}',
    LAMBDA_FUNCTION: 'arn:{partition}:lambda:{region}:{account}:function:{name}',
    RDS_DB_INSTANCE: 'arn:{partition}:rds:{region}:{account}:db:{name}',
    ROUTE53_HOSTED_ZONE: 'arn:{partition}:route53:::hostedzone/{name}',
    S3_BUCKET: 'arn:{partition}:s3:::{name}',
    SNS_TOPIC: 'arn:{partition}:sns:{region}:{account}:{name}',
}

# CloudTrail LookupEvents resource types
CLOUDTRAIL_RESOURCE_TYPES = {
    'AWS::AutoScaling::AutoScalingGroup': AUTOSCALING_GROUP,
    'AWS::AutoScaling::LaunchConfiguration': AUTOSCALING_LAUNCH_CONFIGURATION,
    'AWS::DynamoDB::Table': DYNAMODB_TABLE,
    'AWS::EC2::Ami': EC2_IMAGE,
    'AWS::EC2::CustomerGateway': EC2_CUSTOMER_GATEWAY,
    'AWS::EC2::EIP': EC2_EIP,
    'AWS::EC2::Instance': EC2_INSTANCE,
    'AWS::EC2::InternetGateway': EC2_INTERNET_GATEWAY,
    'AWS::EC2::NatGateway': EC2_NAT_GATEWAY,
    'AWS::EC2::NetworkAcl': EC2_NETWORK_ACL,
    'AWS::EC2::NetworkInterface': EC2_NETWORK_INTERFACE,
    'AWS::EC2::RouteTable': EC2_ROUTE_TABLE,
    'AWS::EC2::SecurityGroup': EC2_SECURITY_GROUP,
    'AWS::EC2::Snapshot': EC2_SNAPSHOT,
    'AWS::EC2::Subnet': EC2_SUBNET,
    'AWS::EC2::Volume': EC2_VOLUME,
    'AWS::EC2::VPC': EC2_VPC,
    'AWS::EC2::VPNGateway': EC2_VPN_GATEWAY,
    'AWS::ElasticLoadBalancing::LoadBalancer': ELB_LOAD_BALANCER,
    'AWS::IAM::InstanceProfile': IAM_INSTANCE_PROFILE,
    'AWS::IAM::Role': IAM_ROLE,
    'AWS::IAM::User': IAM_USER,
    'AWS::KMS::Key': KMS_KEY,
    'AWS::Lambda::Function': LAMBDA_FUNCTION,
    'AWS::RDS::DBInstance': RDS_DB_INSTANCE,
    'AWS::Route53::HostedZone': ROUTE53_HOSTED_ZONE,
    'AWS::S3::Bucket': S3_BUCKET,
    'AWS::SNS::Topic': SNS_TOPIC,
}

# (resource type, resource name, raw event) -> ARN, or '' when impossible
ArnSynthesizer = Callable[[str, str, Dict[str, Any]], str]


def canonical_resource_type(resource_type: str) -> str:
    return CLOUDTRAIL_RESOURCE_TYPES.get(resource_type, resource_type)


def partition_for_region(region: str) -> str:
    if region.startswith('cn-'):
        return 'aws-cn'
    if region.startswith('us-gov-'):
        return 'aws-us-gov'
    return 'aws'


def event_account_id(event: Dict[str, Any]) -> str:
    return get_path(event, 'recipientAccountId') or get_path(event, 'userIdentity.accountId')


def synthesize_arn(resource_type: str, resource_name: str, event: Dict[str, Any]) -> str:
    """Build the ARN of a resource, or return '' if it cannot be built"""
    if resource_name.startswith('arn:'):
        return resource_name

    template = ARN_TEMPLATES.get(canonical_resource_type(resource_type))
    if template is None:
        logger.debug(f"No ARN template for resource type {resource_type!r}")
        return ''

    region = get_path(event, 'awsRegion')
    account = event_account_id(event)
    if ('{region}' in template and not region) or ('{account}' in template and not account):
        logger.debug(f"Cannot build {resource_type} ARN for {resource_name}: region or account missing")
        return ''

    if canonical_resource_type(resource_type) == ROUTE53_HOSTED_ZONE:
        resource_name = resource_name.rsplit('/', 1)[-1]

    return template.format(
        partition=partition_for_region(region),
        region=region,
        account=account,
        name=resource_name
    )
