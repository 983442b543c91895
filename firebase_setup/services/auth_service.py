"""
Authentication Service for Firebase KMP Setup
Checks gcloud and Firebase CLI sessions, logging in only when none is active
"""

import logging

from firebase_setup.utils.error_handler import AuthenticationError

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, runner, gcloud_bin='gcloud', firebase_bin='firebase'):
        self.runner = runner
        self.gcloud_bin = gcloud_bin
        self.firebase_bin = firebase_bin

    def active_gcloud_account(self):
        """
        Return the first active gcloud account, or None when nobody is logged in
        """
        result = self.runner.run([
            self.gcloud_bin, 'auth', 'list',
            '--filter=status:ACTIVE',
            '--format=value(account)',
        ])
        if not result.ok:
            logger.debug(f"gcloud auth list failed: {result.error_text.strip()}")
            return None

        for line in result.text.splitlines():
            if line.strip():
                return line.strip()
        return None

    def ensure_gcloud_session(self):
        """
        Make sure a gcloud account is active, running the interactive login if not
        """
        logger.info("Checking gcloud authentication...")
        account = self.active_gcloud_account()
        if account:
            logger.info(f"You are already logged in to gcloud as: {account}")
            return account

        logger.info("No active gcloud account found. Please log in.")
        login = self.runner.run([self.gcloud_bin, 'auth', 'login'], interactive=True)
        if not login.ok:
            raise AuthenticationError("gcloud login failed or was cancelled", step='gcloud-login')

        account = self.active_gcloud_account()
        if not account:
            raise AuthenticationError("gcloud login finished but no active account was found", step='gcloud-login')

        logger.info(f"Logged in to gcloud as: {account}")
        return account

    def firebase_session_active(self):
        """
        A Firebase CLI session is usable when it can list projects
        """
        result = self.runner.run([self.firebase_bin, 'projects:list', '--json'])
        return result.ok

    def ensure_firebase_session(self):
        """
        Make sure the Firebase CLI is logged in, running the interactive login if not
        """
        if self.firebase_session_active():
            logger.info("Firebase CLI is already logged in.")
            return

        logger.info("Starting Firebase login...")
        login = self.runner.run([self.firebase_bin, 'login', '--no-localhost'], interactive=True)
        if not login.ok:
            raise AuthenticationError(
                "Firebase login failed. Please check your credentials and try again.",
                step='firebase-login'
            )
