"""
Resource Ledger for Firebase KMP Setup
Run-scoped record of remote resources created and files written
"""

from dataclasses import asdict, dataclass
from datetime import datetime, timezone
import json
import logging
from pathlib import Path
import threading

logger = logging.getLogger(__name__)

PROJECT = 'project'
FIREBASE = 'firebase'
APP = 'app'
FILE = 'file'


@dataclass(frozen=True)
class LedgerEntry:
    kind: str
    identifier: str
    detail: str = ''
    created_at: str = ''


class ResourceLedger:
    def __init__(self):
        self._entries = []
        self._lock = threading.Lock()

    def record(self, kind, identifier, detail=''):
        entry = LedgerEntry(
            kind=kind,
            identifier=str(identifier),
            detail=detail,
            created_at=datetime.now(timezone.utc).isoformat(),
        )
        with self._lock:
            self._entries.append(entry)
        return entry

    @property
    def entries(self):
        with self._lock:
            return list(self._entries)

    def __len__(self):
        return len(self.entries)

    def teardown_hints(self):
        """
        Suggested manual cleanup for each recorded resource, newest first
        """
        hints = []
        for entry in reversed(self.entries):
            if entry.kind == PROJECT:
                hints.append(f"gcloud projects delete {entry.identifier}")
            elif entry.kind == FIREBASE:
                hints.append(
                    f"Firebase was added to {entry.identifier}; it is removed with the project "
                    f"(https://console.firebase.google.com/project/{entry.identifier}/settings/general)"
                )
            elif entry.kind == APP:
                hints.append(f"Remove app {entry.identifier} ({entry.detail}) in the Firebase console")
            elif entry.kind == FILE:
                hints.append(f"rm {entry.identifier}")
        return hints

    def report(self):
        """
        Log what this run created so the operator can inspect or tear it down
        """
        entries = self.entries
        if not entries:
            logger.info("No remote resources or files were created in this run.")
            return

        logger.warning("Resources created before the failure:")
        for entry in entries:
            detail = f" ({entry.detail})" if entry.detail else ""
            logger.warning(f"  - {entry.kind}: {entry.identifier}{detail}")
        logger.warning("Suggested cleanup:")
        for hint in self.teardown_hints():
            logger.warning(f"  {hint}")

    def to_dict(self):
        return {'entries': [asdict(entry) for entry in self.entries]}

    def dump(self, path):
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(self.to_dict(), f, indent=2)
        logger.info(f"Ledger written to {path}")
        return path
