"""
Infrastructure

Backends behind the CacheStore protocol.
"""
