"""
Resource identification for CloudTrail events

Events returned by LookupEvents usually carry a structured `Resources` list.
Archived events never do, so for those the resource is recovered from the
event body using a fixed table of resource-creating actions.
"""
import logging
from types import MappingProxyType
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ..models import ResourceIdentity, StructuredResourceRef
from . import arn
from .json_path import get_path


logger = logging.getLogger(__name__)

# CloudTrail eventName -> created resource type and path to its name
RESOURCE_IDENTITY_TABLE = MappingProxyType({
    'RunInstances': ResourceIdentity(arn.EC2_INSTANCE, 'responseElements.instancesSet.items.0.instanceId'),
    'CreateBucket': ResourceIdentity(arn.S3_BUCKET, 'requestParameters.bucketName'),
    'CreateAutoScalingGroup': ResourceIdentity(arn.AUTOSCALING_GROUP, 'requestParameters.autoScalingGroupName'),
    'CreateVpc': ResourceIdentity(arn.EC2_VPC, 'responseElements.vpc.vpcId'),
    'CreateSubnet': ResourceIdentity(arn.EC2_SUBNET, 'responseElements.subnet.subnetId'),
    'CreateLoadBalancer': ResourceIdentity(arn.ELB_LOAD_BALANCER, 'requestParameters.loadBalancerName'),
    'CreateInternetGateway': ResourceIdentity(arn.EC2_INTERNET_GATEWAY, 'responseElements.internetGateway.internetGatewayId'),
    'CreateSecurityGroup': ResourceIdentity(arn.EC2_SECURITY_GROUP, 'responseElements.groupId'),
    'CreateNetworkInterface': ResourceIdentity(arn.EC2_NETWORK_INTERFACE, 'responseElements.networkInterface.networkInterfaceId'),
    'CreateVolume': ResourceIdentity(arn.EC2_VOLUME, 'responseElements.volumeId'),
    'CreateRouteTable': ResourceIdentity(arn.EC2_ROUTE_TABLE, 'responseElements.routeTable.routeTableId'),
    'CreateNatGateway': ResourceIdentity(arn.EC2_NAT_GATEWAY, 'responseElements.CreateNatGatewayResponse.natGateway.natGatewayId'),
    'CreateLaunchConfiguration': ResourceIdentity(arn.AUTOSCALING_LAUNCH_CONFIGURATION, 'requestParameters.launchConfigurationName'),
    'CreateDBInstance': ResourceIdentity(arn.RDS_DB_INSTANCE, 'requestParameters.dBInstanceIdentifier'),
    'CreateRole': ResourceIdentity(arn.IAM_ROLE, 'requestParameters.roleName'),
})


def identity_from_table(event: Dict[str, Any]) -> Optional[Tuple[str, str]]:
    event_name = get_path(event, 'eventName')
    identity = RESOURCE_IDENTITY_TABLE.get(event_name)
    if identity is None:
        logger.debug(f"No resource mapping for event {event_name!r}")
        return None

    resource_name = get_path(event, identity.resource_name_path)
    if not resource_name:
        logger.debug(f"Event {event_name} has no value at {identity.resource_name_path}")
        return None

    return identity.resource_type, resource_name


def resolve_identities(event: Dict[str, Any],
                       resources: Optional[Sequence[StructuredResourceRef]] = None) -> List[Tuple[str, str]]:
    """
    Resolve the (resource type, resource name) pairs an event pertains to.

    Usable structured refs take precedence, one pair per ref. The identity
    table is consulted only when no usable ref exists. An empty list means the
    event cannot be attributed to a resource.
    """
    usable = [r for r in (resources or []) if r.usable]
    if usable:
        return [(r.resource_type, r.resource_name) for r in usable]

    identity = identity_from_table(event)
    return [identity] if identity else []
