"""
Shared Config Module
====================

settings/: YAML configuration files (defaults, user, project)
"""
