"""Command line front end for Brain Dump.

Updates: v0.1.0 - 2026-09-21 - Package scaffold.
"""
