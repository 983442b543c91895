"""
Config Service for Firebase KMP Setup
Downloads per-platform SDK config and writes it into the KMP project tree
"""

import logging
from pathlib import Path

from firebase_setup.models import ConfigArtifact
from firebase_setup.services import ledger as ledger_kinds
from firebase_setup.utils.error_handler import PostConditionError, RemoteCallError

logger = logging.getLogger(__name__)


def strip_header_lines(payload, count):
    """
    Drop the first `count` newline-terminated lines, keeping the rest byte-for-byte
    """
    start = 0
    for _ in range(count):
        newline = payload.find(b'\n', start)
        if newline == -1:
            return b''
        start = newline + 1
    return payload[start:]


class ConfigService:
    def __init__(self, runner, ledger, firebase_bin='firebase'):
        self.runner = runner
        self.ledger = ledger
        self.firebase_bin = firebase_bin

    def download(self, platform, app_id, project_id, project_root):
        """
        Run apps:sdkconfig and return the header-stripped payload as a ConfigArtifact
        """
        result = self.runner.run([
            self.firebase_bin, 'apps:sdkconfig', platform.cli_name, app_id,
            '--project', project_id,
        ])
        if not result.ok:
            raise RemoteCallError(
                f"Failed to download {platform.config_path.name}.",
                command=result.args, stderr=result.error_text, step=f"{platform.cli_name}-config"
            )

        return ConfigArtifact(
            platform=platform,
            destination=Path(project_root) / platform.config_path,
            payload=strip_header_lines(result.stdout, platform.header_lines),
        )

    def write(self, artifact):
        """
        Overwrite the destination with the payload and verify the file exists
        """
        destination = artifact.destination
        step = f"{artifact.platform.cli_name}-config"
        try:
            if artifact.payload:
                destination.parent.mkdir(parents=True, exist_ok=True)
                with open(destination, 'wb') as f:
                    f.write(artifact.payload)
                self.ledger.record(ledger_kinds.FILE, destination, artifact.platform.label)
            elif destination.exists():
                # never leave a previous run's config behind an empty download
                destination.unlink()
        except OSError as e:
            raise PostConditionError(
                f"Failed to write {destination.name}: {e}",
                path=destination, step=step
            ) from e

        if not destination.is_file():
            raise PostConditionError(
                f"Failed to download {destination.name}.",
                path=destination, step=step
            )
        return destination

    def fetch(self, platform, app_id, project_id, project_root, progress=None):
        say = progress or logger.info
        say(f"Downloading {platform.config_path.name}...")
        artifact = self.download(platform, app_id, project_id, project_root)
        destination = self.write(artifact)
        say(f"Wrote {destination}")
        return artifact
