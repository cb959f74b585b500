"""Bundled data package for the model catalog cache.

This namespace exposes the packaged default catalog (models.json) via
importlib.resources. It is not intended for direct import by users.
"""
