"""Bundled data files for backpick."""
