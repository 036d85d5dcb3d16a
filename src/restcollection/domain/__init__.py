"""Domain layer - records, settings and pure query logic.

Nothing in this layer performs I/O.
"""
