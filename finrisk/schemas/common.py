"""Enums shared by several result schemas."""

from enum import Enum


class RiskLevel(str, Enum):
    """Severity of a fraud indicator or level of a risk assessment."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"
