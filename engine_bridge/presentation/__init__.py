"""
PRESENTATION LAYER - HTTP surface of the bridge.
"""
