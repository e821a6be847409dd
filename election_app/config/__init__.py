"""
Configuration module.

Default settings, YAML loading with layered precedence, and validation.
"""
