"""
Automation server health.

Pre-flight reachability probe and the shared health indicator it updates.
"""

from flowdeck.health.probe import HealthProbe
from flowdeck.health.state import HealthState

__all__ = ["HealthProbe", "HealthState"]
