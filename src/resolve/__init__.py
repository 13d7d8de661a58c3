"""Location pattern resolution.

This module expands wildcard locations into existing resources.
It composes bucket enumeration, key listing, and glob matching.
"""
