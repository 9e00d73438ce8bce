"""
Topology modules.
"""
