"""
Flow registry.

Static list of automation flows and the dashboard cards that trigger them.
"""

from flowdeck.registry.flows import DASHBOARD_CARDS, DEFAULT_FLOWS, FlowRegistry, default_registry

__all__ = ["DASHBOARD_CARDS", "DEFAULT_FLOWS", "FlowRegistry", "default_registry"]
