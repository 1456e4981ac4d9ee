"""Utility helpers for prismtheme."""
