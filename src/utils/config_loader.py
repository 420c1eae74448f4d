"""
Configuration loader for the grant intake service
"""

import os
import yaml
from pathlib import Path
from typing import Dict, Any, List, Optional
from pydantic import BaseModel, Field, ValidationError
import logging

logger = logging.getLogger(__name__)

REQUIRED_ZOHO_ENV_VARS = (
    "ZOHO_TOKEN_URL",
    "ZOHO_CLIENT_ID",
    "ZOHO_CLIENT_SECRET",
    "ZOHO_REDIRECT_URI",
    "ZOHO_REFRESH_TOKEN",
    "ZOHO_CREATOR_ORG_ID",
    "ZOHO_CREATOR_APP_ID",
    "ZOHO_CREATOR_FORM2_NAME",
)


class ZohoConfig(BaseModel):
    """Zoho Creator credentials and link names"""

    token_url: str = "https://accounts.zoho.com/oauth/v2/token"
    client_id: str = ""
    client_secret: str = ""
    redirect_uri: str = ""
    refresh_token: str = ""
    org_id: str = ""
    app_id: str = ""
    creator_api_base: str = "https://creator.zoho.com/api/v2"
    data_api_base: str = "https://www.zohoapis.com/creator/v2.1/data"
    proposal_form: str = ""
    concept_form: str = ""
    community_form: str = ""
    upload_report: str = "All_Gap_Concept_Paper"
    concept_report: str = "All_Gap_Concept_Paper"
    timeout_seconds: float = Field(default=30.0, gt=0)
    default_token_lifetime: int = Field(default=3600, ge=60)

    def form_for(self, variant: str) -> str:
        value = getattr(variant, "value", variant)
        return {
            "concept": self.concept_form,
            "proposal": self.proposal_form,
            "community_proposal": self.community_form,
        }.get(value, "")


class SmtpConfig(BaseModel):
    """Outgoing mail settings"""

    host: str = "smtp.gmail.com"
    port: int = Field(default=465, ge=1, le=65535)
    user: str = ""
    password: str = ""
    from_address: str = ""
    from_name: str = "Belize Fund"

    @property
    def use_ssl(self) -> bool:
        return self.port == 465

    @property
    def enabled(self) -> bool:
        return bool(self.host and self.user and self.password)


class UploadConfig(BaseModel):
    max_bytes: int = Field(default=10 * 1024 * 1024, ge=1)
    allowed_content_types: List[str] = Field(default_factory=lambda: ["application/pdf"])


class IntakeConfig(BaseModel):
    """Complete intake configuration"""

    zoho: ZohoConfig = Field(default_factory=ZohoConfig)
    smtp: SmtpConfig = Field(default_factory=SmtpConfig)
    uploads: UploadConfig = Field(default_factory=UploadConfig)
    report_fields: List[str] = Field(default_factory=list)


_ENV_OVERRIDES: Dict[str, tuple] = {
    "ZOHO_TOKEN_URL": ("zoho", "token_url"),
    "ZOHO_CLIENT_ID": ("zoho", "client_id"),
    "ZOHO_CLIENT_SECRET": ("zoho", "client_secret"),
    "ZOHO_REDIRECT_URI": ("zoho", "redirect_uri"),
    "ZOHO_REFRESH_TOKEN": ("zoho", "refresh_token"),
    "ZOHO_CREATOR_ORG_ID": ("zoho", "org_id"),
    "ZOHO_CREATOR_APP_ID": ("zoho", "app_id"),
    "ZOHO_CREATOR_FORM_NAME": ("zoho", "proposal_form"),
    "ZOHO_CREATOR_FORM2_NAME": ("zoho", "concept_form"),
    "ZOHO_CREATOR_COMMUNITY_FORM_NAME": ("zoho", "community_form"),
    "EMAIL_HOST": ("smtp", "host"),
    "EMAIL_PORT": ("smtp", "port"),
    "EMAIL_USER": ("smtp", "user"),
    "EMAIL_PASS": ("smtp", "password"),
    "EMAIL_FROM_ADDRESS": ("smtp", "from_address"),
    "EMAIL_FROM_NAME": ("smtp", "from_name"),
}


def load_intake_config(config_path: Optional[Path] = None, env: Optional[Dict[str, str]] = None) -> IntakeConfig:
    """
    Load and validate intake configuration.

    Non-secret settings come from YAML; credentials and overrides come from
    environment variables.

    Args:
        config_path: Path to config file. Defaults to config/intake_config.yml
        env: Environment mapping. Defaults to os.environ

    Returns:
        Validated IntakeConfig object

    Raises:
        ValidationError: If config doesn't match schema
    """
    if config_path is None:
        config_path = Path(__file__).parent.parent.parent / "config" / "intake_config.yml"
    env = os.environ if env is None else env

    config_data: Dict[str, Any] = {}
    if config_path.exists():
        with open(config_path, "r", encoding="utf-8") as f:
            config_data = yaml.safe_load(f) or {}
    else:
        logger.info(f"Config file not found, using defaults: {config_path}")

    for var, (section, key) in _ENV_OVERRIDES.items():
        value = env.get(var)
        if value:
            config_data.setdefault(section, {})[key] = value

    missing = [var for var in REQUIRED_ZOHO_ENV_VARS if not env.get(var)]
    if missing:
        logger.warning("Missing Zoho environment variables: %s", missing)

    try:
        config = IntakeConfig(**config_data)
        logger.info(
            "Loaded intake config: org=%s app=%s concept_form=%s",
            config.zoho.org_id, config.zoho.app_id, config.zoho.concept_form,
        )
        return config
    except ValidationError as e:
        logger.error(f"Config validation failed: {e}")
        raise
