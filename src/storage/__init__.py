"""Object storage access layer.

This module wraps storage backends behind addressable resources.
It maps location strings onto bucket and key handles for the resolver.
"""
