"""
Infrastructure Module

Store connectivity: shared client, replicated connection handles and the
per-context connection wrapper.
"""
