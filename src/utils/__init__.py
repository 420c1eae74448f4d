"""
Utility modules for the grant intake service
"""
from .config_loader import load_intake_config, IntakeConfig, SmtpConfig, UploadConfig, ZohoConfig

__all__ = [
    'load_intake_config',
    'IntakeConfig',
    'SmtpConfig',
    'UploadConfig',
    'ZohoConfig',
]
