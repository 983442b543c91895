"""
Firebase Service for Firebase KMP Setup
Adds Firebase to a resolved Google Cloud project
"""

import json
import logging

from firebase_setup.services import ledger as ledger_kinds
from firebase_setup.utils.error_handler import RemoteCallError

logger = logging.getLogger(__name__)


def unwrap_cli_result(data):
    """
    firebase --json wraps payloads as {"status": ..., "result": ...}
    """
    if isinstance(data, dict) and 'result' in data and 'status' in data:
        return data['result']
    return data


class FirebaseService:
    def __init__(self, runner, ledger, firebase_bin='firebase'):
        self.runner = runner
        self.ledger = ledger
        self.firebase_bin = firebase_bin

    def firebase_enabled(self, project_id):
        """
        Check whether project_id is already listed as a Firebase project
        """
        result = self.runner.run([self.firebase_bin, 'projects:list', '--json'])
        if not result.ok:
            return False

        try:
            projects = unwrap_cli_result(json.loads(result.text))
        except ValueError:
            logger.debug("Could not parse firebase projects:list output")
            return False

        if not isinstance(projects, list):
            return False
        return any(isinstance(p, dict) and p.get('projectId') == project_id for p in projects)

    def attach(self, project_id):
        """
        Add Firebase to project_id unless it is already enabled
        """
        if self.firebase_enabled(project_id):
            logger.info(f"Firebase is already enabled for '{project_id}'.")
            return False

        logger.info("Adding Firebase to the project...")
        result = self.runner.run([self.firebase_bin, 'projects:addfirebase', project_id])
        if not result.ok:
            raise RemoteCallError(
                "Failed to add Firebase to the project. Please check the error message above.",
                command=result.args, stderr=result.error_text, step='firebase'
            )

        self.ledger.record(ledger_kinds.FIREBASE, project_id, 'Firebase enabled')
        return True
