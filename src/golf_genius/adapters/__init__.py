"""
Adapters connecting the client to external systems.
"""
