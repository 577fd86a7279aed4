"""
Configuration management - externalized through environment variables.
"""
from .environment import EnvironmentConfig, load_environment

__all__ = ['EnvironmentConfig', 'load_environment']
