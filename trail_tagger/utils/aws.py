"""Boto3 session helpers"""
import logging
from typing import Optional

import boto3


logger = logging.getLogger(__name__)


class AWSHelper:
    """Helper class for creating AWS clients"""

    def __init__(self, profile: Optional[str] = None):
        """Initialize AWS helper with optional profile"""
        self.profile = profile
        if profile:
            self.session = boto3.Session(profile_name=profile)
        else:
            self.session = boto3.Session()

    def get_client(self, service: str, region: Optional[str] = None):
        """Get boto3 client for a service"""
        return self.session.client(service, region_name=region)

    def cloudtrail_client(self, region: Optional[str] = None):
        logger.debug(f"Creating CloudTrail client (profile={self.profile}, region={region})")
        return self.get_client('cloudtrail', region)
