"""
HTTP layer.

``router.register_routes`` mounts one router per resource under
``/api``.  Endpoint modules live in ``endpoints``; services reach them
through the dependencies in ``deps``.
"""
