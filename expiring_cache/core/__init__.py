"""
Core

Configuration, exceptions, protocols and wiring.
"""
