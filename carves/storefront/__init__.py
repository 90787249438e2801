"""Storefront application: reactive state, dashboard controller and Flet UI."""
