"""
Configuration resolved from the environment.
"""
