"""
Domain Models for Firebase KMP Setup
Platforms, app identities, config artifacts and provisioning requests
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path

ANDROID_APP_DIR = Path('composeApp') / 'src' / 'androidMain'
IOS_APP_DIR = Path('iosApp')


class Platform(Enum):
    ANDROID = 'android'
    IOS = 'ios'

    @property
    def cli_name(self) -> str:
        return self.value

    @property
    def label(self) -> str:
        return 'Android' if self is Platform.ANDROID else 'iOS'

    @property
    def id_flag(self) -> str:
        return '--package-name' if self is Platform.ANDROID else '--bundle-id'

    @property
    def header_lines(self) -> int:
        # sdkconfig framing: android prints one banner line, ios prints two
        return 1 if self is Platform.ANDROID else 2

    @property
    def app_dir(self) -> Path:
        return ANDROID_APP_DIR if self is Platform.ANDROID else IOS_APP_DIR

    @property
    def config_path(self) -> Path:
        if self is Platform.ANDROID:
            return ANDROID_APP_DIR / 'app' / 'google-services.json'
        return IOS_APP_DIR / 'GoogleService-Info.plist'


@dataclass(frozen=True)
class ApplicationIdentity:
    platform: Platform
    package_id: str
    generated_app_id: str | None = None

    def with_app_id(self, app_id: str) -> ApplicationIdentity:
        if self.generated_app_id is not None:
            raise ValueError(f"{self.platform.label} app id is already set")
        return replace(self, generated_app_id=app_id)


@dataclass(frozen=True)
class ConfigArtifact:
    platform: Platform
    destination: Path
    payload: bytes


@dataclass(frozen=True)
class ProvisioningRequest:
    project_root: Path
    project_id: str
    app_id: str
    ios_bundle_id: str | None = None

    def package_id_for(self, platform: Platform) -> str:
        if platform is Platform.IOS and self.ios_bundle_id:
            return self.ios_bundle_id
        return self.app_id
