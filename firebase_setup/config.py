"""
Configuration for Firebase KMP Setup
Loads .env and environment variables into a frozen Settings object
"""

from dataclasses import dataclass
import os
from typing import Optional

from dotenv import load_dotenv

from firebase_setup.utils.error_handler import SetupError


def _split_csv(value):
    return tuple(item.strip() for item in value.split(",") if item.strip())


def _flag(name, default="false"):
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


def _optional_float(name):
    value = os.getenv(name, "").strip()
    if not value:
        return None
    try:
        return float(value)
    except ValueError:
        raise SetupError(
            f"{name} must be a number of seconds, got '{value}'",
            step="config", error_code="CONFIG_ERROR"
        )


@dataclass(frozen=True)
class Settings:
    log_level: str = "INFO"
    gcloud_bin: str = "gcloud"
    firebase_bin: str = "firebase"
    required_tools: tuple = ("node", "gcloud", "firebase")

    default_project_root: str = ""
    default_project_id: str = ""
    default_app_id: str = ""
    ios_bundle_id: str = ""

    parallel_platforms: bool = False
    set_active_project: bool = False
    command_timeout: Optional[float] = None
    ledger_path: str = ""

    @classmethod
    def from_env(cls, env_file=None):
        load_dotenv(env_file)
        return cls(
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            gcloud_bin=os.getenv("GCLOUD_BIN", "gcloud"),
            firebase_bin=os.getenv("FIREBASE_BIN", "firebase"),
            required_tools=_split_csv(os.getenv("REQUIRED_TOOLS", "node,gcloud,firebase")),
            default_project_root=os.getenv("KMP_PROJECT_ROOT", ""),
            default_project_id=os.getenv("FIREBASE_PROJECT_ID", ""),
            default_app_id=os.getenv("APP_PACKAGE_ID", ""),
            ios_bundle_id=os.getenv("IOS_BUNDLE_ID", ""),
            parallel_platforms=_flag("PARALLEL_PLATFORMS"),
            set_active_project=_flag("SET_ACTIVE_PROJECT"),
            command_timeout=_optional_float("COMMAND_TIMEOUT"),
            ledger_path=os.getenv("LEDGER_PATH", ""),
        )
