"""
Provisioning Workflow for Firebase KMP Setup
Sequences tool/session checks, project resolution, Firebase attachment,
app registration and config download, aborting on the first failure
"""

from concurrent.futures import ThreadPoolExecutor
from enum import Enum
import logging
from pathlib import Path

from firebase_setup.config import Settings
from firebase_setup.models import Platform
from firebase_setup.services.app_service import AppService
from firebase_setup.services.auth_service import AuthService
from firebase_setup.services.config_service import ConfigService
from firebase_setup.services.firebase_service import FirebaseService
from firebase_setup.services.ledger import ResourceLedger
from firebase_setup.services.project_service import ProjectService
from firebase_setup.services.tooling_service import ToolingService
from firebase_setup.utils.error_handler import ProjectLayoutError, SetupError

logger = logging.getLogger(__name__)


class Stage(Enum):
    TOOLS_CHECKED = 'tools-checked'
    LAYOUT_VERIFIED = 'layout-verified'
    SESSION_AUTHENTICATED = 'session-authenticated'
    FIREBASE_CLI_READY = 'firebase-cli-ready'
    PROJECT_RESOLVED = 'project-resolved'
    FIREBASE_ATTACHED = 'firebase-attached'
    ANDROID_REGISTERED = 'android-registered'
    ANDROID_CONFIG_WRITTEN = 'android-config-written'
    IOS_REGISTERED = 'ios-registered'
    IOS_CONFIG_WRITTEN = 'ios-config-written'
    COMPLETE = 'complete'


PLATFORM_ORDER = (Platform.ANDROID, Platform.IOS)

PLATFORM_STAGES = {
    Platform.ANDROID: (Stage.ANDROID_REGISTERED, Stage.ANDROID_CONFIG_WRITTEN),
    Platform.IOS: (Stage.IOS_REGISTERED, Stage.IOS_CONFIG_WRITTEN),
}


class WorkflowState:
    """Ordered record of completed stages for a single run; never persisted"""

    def __init__(self):
        self.completed = []
        self.attempting = None
        self.aborted_at = None
        self.project_id = None
        self.identities = {}
        self.artifacts = {}

    @property
    def current(self):
        return self.completed[-1] if self.completed else None

    @property
    def is_complete(self):
        return self.current is Stage.COMPLETE

    def begin(self, stage):
        self.attempting = stage

    def advance(self, stage):
        if stage in self.completed:
            raise ValueError(f"Stage {stage.value} already completed")
        self.completed.append(stage)
        self.attempting = None


class _PlatformOutcome:
    def __init__(self, platform):
        self.platform = platform
        self.messages = []
        self.completed = []
        self.attempting = None
        self.identity = None
        self.artifact = None
        self.error = None


class ProvisioningWorkflow:
    def __init__(self, runner, settings=None, tooling=None, ledger=None):
        self.settings = settings or Settings()
        self.runner = runner
        self.ledger = ledger if ledger is not None else ResourceLedger()
        self.tooling = tooling or ToolingService()

        gcloud_bin = self.settings.gcloud_bin
        firebase_bin = self.settings.firebase_bin
        self.auth = AuthService(runner, gcloud_bin, firebase_bin)
        self.projects = ProjectService(runner, self.ledger, gcloud_bin)
        self.firebase = FirebaseService(runner, self.ledger, firebase_bin)
        self.apps = AppService(runner, self.ledger, firebase_bin)
        self.configs = ConfigService(runner, self.ledger, firebase_bin)

    def verify_layout(self, project_root):
        """
        Pre-flight: the KMP root, its Android source set and iOS app dir must exist
        """
        root = Path(project_root)
        if not root.is_dir():
            raise ProjectLayoutError(f"The directory '{root}' does not exist.", path=root, step='layout')

        for platform in PLATFORM_ORDER:
            app_dir = root / platform.app_dir
            if not app_dir.is_dir():
                raise ProjectLayoutError(
                    f"{platform.label} app directory '{app_dir}' does not exist.",
                    path=app_dir, step='layout'
                )
        return root

    def run(self, request):
        """
        Provision Firebase for request; returns the final WorkflowState or raises SetupError
        """
        state = WorkflowState()
        try:
            self._run(request, state)
        except SetupError as e:
            state.aborted_at = state.attempting
            if e.step is None and state.attempting is not None:
                e.step = state.attempting.value
            self._surface_ledger()
            raise
        except KeyboardInterrupt:
            state.aborted_at = state.attempting
            self._surface_ledger()
            raise
        return state

    def _run(self, request, state):
        state.begin(Stage.TOOLS_CHECKED)
        self.tooling.ensure_tools(self.settings.required_tools)
        state.advance(Stage.TOOLS_CHECKED)

        state.begin(Stage.LAYOUT_VERIFIED)
        root = self.verify_layout(request.project_root)
        state.advance(Stage.LAYOUT_VERIFIED)

        state.begin(Stage.SESSION_AUTHENTICATED)
        self.auth.ensure_gcloud_session()
        state.advance(Stage.SESSION_AUTHENTICATED)

        state.begin(Stage.FIREBASE_CLI_READY)
        self.auth.ensure_firebase_session()
        state.advance(Stage.FIREBASE_CLI_READY)

        state.begin(Stage.PROJECT_RESOLVED)
        project_id = self.projects.resolve(request.project_id)
        if self.settings.set_active_project:
            self.projects.set_active_project(project_id)
        state.project_id = project_id
        state.advance(Stage.PROJECT_RESOLVED)

        state.begin(Stage.FIREBASE_ATTACHED)
        self.firebase.attach(project_id)
        state.advance(Stage.FIREBASE_ATTACHED)

        if self.settings.parallel_platforms:
            self._provision_platforms_concurrently(request, root, project_id, state)
        else:
            for platform in PLATFORM_ORDER:
                self._provision_platform_in_order(request, root, project_id, platform, state)

        state.advance(Stage.COMPLETE)
        logger.info("Firebase project setup complete.")
        logger.info(
            f"Downloaded {Platform.ANDROID.config_path.name} and {Platform.IOS.config_path.name}."
        )

    def _provision_platform_in_order(self, request, root, project_id, platform, state):
        registered, written = PLATFORM_STAGES[platform]
        package_id = request.package_id_for(platform)

        state.begin(registered)
        identity = self.apps.register(platform, package_id, project_id)
        state.identities[platform] = identity
        state.advance(registered)

        state.begin(written)
        artifact = self.configs.fetch(platform, identity.generated_app_id, project_id, root)
        state.artifacts[platform] = artifact
        state.advance(written)

    def _provision_platform_task(self, request, root, project_id, platform):
        outcome = _PlatformOutcome(platform)
        registered, written = PLATFORM_STAGES[platform]
        package_id = request.package_id_for(platform)
        try:
            outcome.attempting = registered
            outcome.identity = self.apps.register(
                platform, package_id, project_id, progress=outcome.messages.append
            )
            outcome.completed.append(registered)

            outcome.attempting = written
            outcome.artifact = self.configs.fetch(
                platform, outcome.identity.generated_app_id, project_id, root,
                progress=outcome.messages.append
            )
            outcome.completed.append(written)
            outcome.attempting = None
        except SetupError as e:
            outcome.error = e
        return outcome

    def _provision_platforms_concurrently(self, request, root, project_id, state):
        with ThreadPoolExecutor(max_workers=len(PLATFORM_ORDER)) as pool:
            futures = [
                pool.submit(self._provision_platform_task, request, root, project_id, platform)
                for platform in PLATFORM_ORDER
            ]
            outcomes = [future.result() for future in futures]

        # merge in platform order so the trail reads the same as a sequential run
        for outcome in outcomes:
            for message in outcome.messages:
                logger.info(message)
            if outcome.identity is not None:
                state.identities[outcome.platform] = outcome.identity
            if outcome.artifact is not None:
                state.artifacts[outcome.platform] = outcome.artifact
            for stage in outcome.completed:
                state.advance(stage)
            if outcome.error is not None:
                state.begin(outcome.attempting)
                raise outcome.error

    def _surface_ledger(self):
        self.ledger.report()
        if self.settings.ledger_path and len(self.ledger):
            try:
                self.ledger.dump(self.settings.ledger_path)
            except OSError as e:
                logger.warning(f"Could not write ledger to {self.settings.ledger_path}: {e}")
