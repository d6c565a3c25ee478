"""
API package containing the REST routes.

``router.router`` bundles every domain router; ``main.create_app``
mounts it under ``/api``.
"""
