"""
Navigation configuration.

Usage:
    config = NavConfig(cone_slope=2.0, unresolved_warn_passes=120)
    system = NavigationSystem(tree, config=config)
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class NavConfig(BaseModel):
    """
    Tunables for request resolution.

    Attributes:
        cone_slope: A candidate is "in direction" when its perpendicular
            offset is strictly less than cone_slope times its offset along
            the requested axis. 1.0 is a 90 degree cone.
        unresolved_warn_passes: Number of passes a by-name anchor may stay
            unresolved before a warning is logged (then repeated every
            that many passes). 0 disables the warning.
        warn_on_multiple_requests: Log at warning level instead of debug
            when a single pass carries more than one request.
    """

    model_config = ConfigDict(
        validate_assignment=True,
        extra='forbid',
    )

    cone_slope: float = Field(default=1.0, gt=0.0)
    unresolved_warn_passes: int = Field(default=60, ge=0)
    warn_on_multiple_requests: bool = False


DEFAULT_CONFIG = NavConfig()
