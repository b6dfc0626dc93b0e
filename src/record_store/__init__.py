"""
Record Store - Multi-tenant schema-checked record store

A small single-node store of named databases holding named collections.
Each collection enforces a fixed schema over delimited text records kept
in an append-only backing file.
"""

__version__ = "0.1.0"
__author__ = "Systems Engineering Portfolio"
