"""
NetTrust Output
================

Console rendering and JSON reports.
"""
