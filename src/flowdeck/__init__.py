"""
flowdeck: Automation Flow Console.

Triggers predefined browser automation flows on a remote automation server
and reports coarse success/failure feedback.
"""

__version__ = "0.1.0"
