"""In-memory snapshot of a project directory.

This package provides the tree built from a project directory, with excluded
paths left out and every retained file carried as its UTF-8 text content.
"""
