"""AWS region codes and their human-readable names."""

from types import MappingProxyType
from typing import Mapping

REGION_NAMES: Mapping[str, str] = MappingProxyType({
    "us-east-1": "US East (N. Virginia)",
    "us-east-2": "US East (Ohio)",
    "us-west-1": "US West (N. California)",
    "us-west-2": "US West (Oregon)",
    "ca-central-1": "Canada (Central)",
    "sa-east-1": "South America (São Paulo)",
    "eu-west-1": "Europe (Ireland)",
    "eu-west-2": "Europe (London)",
    "eu-central-1": "Europe (Frankfurt am Main)",
    "eu-north-1": "Europe (Stockholm)",
    "eu-west-3": "Europe (Paris)",
    "eu-south-1": "Europe (Milan)",
    "ap-northeast-1": "Asia Pacific (Tokyo)",
    "ap-northeast-2": "Asia Pacific (Seoul)",
    "ap-northeast-3": "Asia Pacific (Osaka)",
    "ap-south-1": "Asia Pacific (Mumbai)",
    "ap-southeast-1": "Asia Pacific (Singapore)",
    "ap-southeast-2": "Asia Pacific (Sydney)",
    "ap-southeast-5": "Asia Pacific (Malaysia)",
    "ap-southeast-7": "Asia Pacific (Thailand)",
    "ap-east-1": "Asia Pacific (Hong Kong)",
    "af-south-1": "Africa (Cape Town)",
    "me-south-1": "Middle East (Bahrain)",
    "cn-north-1": "China (Beijing)",
    "cn-northwest-1": "China (Ningxia)",
})


def pretty_region_name(region_code: str) -> str:
    """Map a region code to its display name; unknown codes pass through."""
    return REGION_NAMES.get(region_code, region_code)


def get_group_name(region_name: str) -> str:
    """Group a display name into Europe, Americas, Oceania, China or Asia."""
    if region_name.startswith("Europe"):
        return "Europe"
    if region_name.startswith(("US", "Canada", "South America")):
        return "Americas"
    if "Sydney" in region_name:
        return "Oceania"
    if "China" in region_name:
        return "China"
    return "Asia"
