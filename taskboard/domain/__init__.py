"""
Domain entities and data-transfer objects.
"""
