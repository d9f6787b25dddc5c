"""Conversion pipeline: CSS, markup and EPUB extraction."""
