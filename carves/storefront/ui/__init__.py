"""Flet presentation helpers."""
