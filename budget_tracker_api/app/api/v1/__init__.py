"""
Version 1 of the API.

This subpackage bundles the transaction and summary endpoints.  As the
API evolves, breaking changes should be introduced in new version
subpackages (e.g. ``v2``).
"""
