"""
Project Service for Firebase KMP Setup
Resolves the Google Cloud project: reuse when it exists, create otherwise
"""

import logging

from firebase_setup.services import ledger as ledger_kinds
from firebase_setup.utils.error_handler import RemoteCallError

logger = logging.getLogger(__name__)


class ProjectService:
    def __init__(self, runner, ledger, gcloud_bin='gcloud'):
        self.runner = runner
        self.ledger = ledger
        self.gcloud_bin = gcloud_bin

    def project_exists(self, project_id):
        """
        True only when the listing returns a line equal to project_id
        """
        result = self.runner.run([
            self.gcloud_bin, 'projects', 'list',
            f'--filter=projectId:{project_id}',
            '--format=value(projectId)',
        ])
        if not result.ok:
            raise RemoteCallError(
                f"Could not list Google Cloud projects while looking for '{project_id}'",
                command=result.args, stderr=result.error_text, step='project'
            )
        return any(line.strip() == project_id for line in result.text.splitlines())

    def resolve(self, project_id):
        """
        Return project_id once a project with that id is known to exist
        """
        logger.info(f"Checking if the Google Cloud project '{project_id}' exists...")
        if self.project_exists(project_id):
            logger.info(f"Google Cloud project '{project_id}' already exists.")
            return project_id

        logger.info("Creating Google Cloud project...")
        result = self.runner.run([self.gcloud_bin, 'projects', 'create', project_id])
        if not result.ok:
            raise RemoteCallError(
                f"Failed to create Google Cloud project '{project_id}'. Please check the error message above.",
                command=result.args, stderr=result.error_text, step='project'
            )

        self.ledger.record(ledger_kinds.PROJECT, project_id, 'Google Cloud project')
        logger.info(f"Created Google Cloud project '{project_id}'.")
        return project_id

    def set_active_project(self, project_id):
        """
        Point the gcloud config at project_id; later calls pass --project explicitly
        """
        result = self.runner.run([self.gcloud_bin, 'config', 'set', 'project', project_id])
        if not result.ok:
            logger.warning(f"Could not set gcloud active project to '{project_id}': {result.error_text.strip()}")
            return False
        return True
