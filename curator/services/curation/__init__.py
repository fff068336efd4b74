"""Curation analysis and optimization engine.

Modules are imported directly (``curator.services.curation.service`` and
friends) to keep the package import free of cycles.
"""
