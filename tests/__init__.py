"""
Test suite for formpager.

Tests mirror the package layout: engine, export, importers, forms and utils.
"""
