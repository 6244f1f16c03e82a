"""
Configuration module for the grocery parser
"""

from .settings import Settings, get_settings
from .pipeline_config import PipelineConfig, TimeoutConfig, get_config

__all__ = [
    'Settings',
    'get_settings',
    'PipelineConfig',
    'TimeoutConfig',
    'get_config'
]
