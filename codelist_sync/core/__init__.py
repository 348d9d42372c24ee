# Path: codelist_sync/core/__init__.py
"""
codelist_sync Core Package

Core utilities shared by all layers.

Submodules:
    - logger: IPO-aware logging system
"""
