"""
App Service for Firebase KMP Setup
Registers Android/iOS apps under a Firebase project and validates the generated app id
"""

import json
import logging

from firebase_setup.models import ApplicationIdentity
from firebase_setup.services import ledger as ledger_kinds
from firebase_setup.services.firebase_service import unwrap_cli_result
from firebase_setup.utils.error_handler import RemoteCallError, ResponseShapeError

logger = logging.getLogger(__name__)


def parse_app_id(raw, platform=None, command=None):
    """
    Extract appId from an apps:create --json response.

    Accepts the bare object or the CLI's status/result envelope. A missing,
    empty or null appId is fatal: nothing downstream may run with it.
    """
    label = f"{platform.label} app" if platform else 'app'
    step = f"{platform.cli_name}-register" if platform else 'register'

    try:
        data = json.loads(raw)
    except (TypeError, ValueError):
        raise ResponseShapeError(
            f"Failed to create {label}: response was not valid JSON",
            command=command, raw=raw, step=step
        )

    data = unwrap_cli_result(data)
    if not isinstance(data, dict):
        raise ResponseShapeError(
            f"Failed to create {label}: expected a JSON object",
            command=command, raw=raw, step=step
        )

    app_id = data.get('appId')
    if app_id is None or not str(app_id).strip() or str(app_id).strip() == 'null':
        raise ResponseShapeError(
            f"Failed to create {label}: response has no appId",
            command=command, raw=raw, step=step
        )
    return str(app_id).strip()


class AppService:
    def __init__(self, runner, ledger, firebase_bin='firebase'):
        self.runner = runner
        self.ledger = ledger
        self.firebase_bin = firebase_bin

    def find_existing(self, platform, package_id, project_id):
        """
        Return the appId of an app already registered for package_id, if any
        """
        result = self.runner.run([
            self.firebase_bin, 'apps:list', platform.cli_name.upper(),
            '--project', project_id, '--json',
        ])
        if not result.ok:
            return None

        try:
            apps = unwrap_cli_result(json.loads(result.text))
        except ValueError:
            return None

        if not isinstance(apps, list):
            return None

        for app in apps:
            if not isinstance(app, dict):
                continue
            if app.get('namespace') == package_id and app.get('appId'):
                return app['appId']
        return None

    def register(self, platform, package_id, project_id, progress=None):
        """
        Register package_id as a platform app and return its ApplicationIdentity
        """
        say = progress or logger.info
        identity = ApplicationIdentity(platform=platform, package_id=package_id)

        existing = self.find_existing(platform, package_id, project_id)
        if existing:
            say(f"{platform.label} app '{package_id}' already registered as {existing}.")
            return identity.with_app_id(existing)

        say(f"Adding {platform.label} app to the project...")
        result = self.runner.run([
            self.firebase_bin, 'apps:create', platform.cli_name, package_id,
            platform.id_flag, package_id,
            '--project', project_id, '--json',
        ])
        if not result.ok:
            raise RemoteCallError(
                f"Failed to create {platform.label} app. Please check the error message above.",
                command=result.args, stderr=result.error_text, step=f"{platform.cli_name}-register"
            )

        app_id = parse_app_id(result.text, platform=platform, command=result.args)
        self.ledger.record(ledger_kinds.APP, app_id, f"{platform.label} {package_id}")
        say(f"{platform.label} app registered: {app_id}")
        return identity.with_app_id(app_id)
