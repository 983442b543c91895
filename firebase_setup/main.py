"""
Firebase KMP Setup - command line entry point

Creates (or reuses) a Google Cloud project, adds Firebase, registers the
Android and iOS apps and drops google-services.json / GoogleService-Info.plist
into a Kotlin Multiplatform project.
"""

import logging
from pathlib import Path
import sys

from firebase_setup.config import Settings
from firebase_setup.models import ProvisioningRequest
from firebase_setup.services.workflow import ProvisioningWorkflow
from firebase_setup.utils.command_runner import CommandRunner
from firebase_setup.utils.error_handler import EXIT_SUCCESS, SetupError, handle_error, require_answer

logger = logging.getLogger(__name__)

PROMPTS = (
    ('project_root', "Enter the path to your KMP project root directory"),
    ('project_id', "Enter your Firebase Project ID (must be unique, e.g., my-awesome-project)"),
    ('app_id', "Enter your app package name for Android and iOS (e.g., com.example.app)"),
)


def configure_logging(level):
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(message)s",
    )


def ask(prompt, default='', input_fn=input):
    """Prompt once, falling back to default on an empty answer"""
    suffix = f" [{default}]" if default else ""
    answer = input_fn(f"{prompt}{suffix}: ").strip()
    return answer or default


def prompt_for_request(settings, input_fn=input):
    """
    Ask for the KMP root, project id and package id, in that order
    """
    defaults = {
        'project_root': settings.default_project_root,
        'project_id': settings.default_project_id,
        'app_id': settings.default_app_id,
    }
    answers = {}
    for key, prompt in PROMPTS:
        answers[key] = require_answer(ask(prompt, defaults[key], input_fn), key)

    return ProvisioningRequest(
        project_root=Path(answers['project_root']).expanduser(),
        project_id=answers['project_id'],
        app_id=answers['app_id'],
        ios_bundle_id=settings.ios_bundle_id or None,
    )


def main(settings=None, runner=None, input_fn=input):
    try:
        settings = settings or Settings.from_env()
    except SetupError as e:
        configure_logging('INFO')
        return handle_error(e)

    configure_logging(settings.log_level)
    runner = runner or CommandRunner(timeout=settings.command_timeout)

    try:
        request = prompt_for_request(settings, input_fn)
        ProvisioningWorkflow(runner, settings).run(request)
        return EXIT_SUCCESS
    except (Exception, KeyboardInterrupt) as e:
        return handle_error(e)


def run():
    sys.exit(main())


if __name__ == "__main__":
    run()
