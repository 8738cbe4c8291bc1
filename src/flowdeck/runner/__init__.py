"""
Flow runner.

Health-gated execution of registered flows against the automation server.
"""

from flowdeck.runner.runner import FlowRunner

__all__ = ["FlowRunner"]
