"""Typed wrappers for individual GitHub REST resources."""
