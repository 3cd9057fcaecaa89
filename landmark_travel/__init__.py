"""
Landmark travel: resolve map links to coordinates and measure traffic-aware
travel between a target and a set of landmarks.
"""

__version__ = "1.0.0"
