"""
lltrace - span trace reconstruction and viewer.

Rebuilds a span tree from Start/End lifecycle events and exposes it for
inspection (outline rows, timeline bars, Chrome trace export, Qt viewer).
"""

__version__ = "0.1.0"
