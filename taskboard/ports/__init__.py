"""
Ports (abstract interfaces) implemented by adapters.
"""
