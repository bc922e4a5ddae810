"""
HTTP layer: routes, controllers, validation middleware and schemas.
"""
