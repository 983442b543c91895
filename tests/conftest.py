"""Pytest configuration and shared fixtures."""

import json

import pytest

from firebase_setup.config import Settings
from firebase_setup.services.ledger import ResourceLedger
from firebase_setup.utils.command_runner import CommandResult

PROJECT_ID = 'my-app-123'
APP_ID = 'com.example.app'
ANDROID_APP_ID = '1:111111111111:android:aaaaaaaaaaaaaaaa'
IOS_APP_ID = '1:111111111111:ios:bbbbbbbbbbbbbbbb'

ANDROID_SDKCONFIG = (
    b'=== Your app configuration:\n'
    b'{\n'
    b'  "project_info": {"project_id": "my-app-123"},\n'
    b'  "client": []\n'
    b'}\n'
)
IOS_SDKCONFIG = (
    b'=== Your app configuration:\n'
    b'\n'
    b'<?xml version="1.0" encoding="UTF-8"?>\n'
    b'<plist version="1.0"><dict></dict></plist>\n'
    b'\n'
)


def cli_json(result):
    """Encode a payload the way `firebase ... --json` prints it"""
    return json.dumps({'status': 'success', 'result': result})


class FakeRunner:
    """
    Scripted stand-in for CommandRunner.

    Responses are matched by argument prefix; the most recently registered
    match wins. Unmatched commands succeed with empty output.
    """

    def __init__(self):
        self.calls = []
        self.responses = []

    def on(self, *prefix, returncode=0, stdout=b'', stderr=b''):
        if isinstance(stdout, str):
            stdout = stdout.encode('utf-8')
        if isinstance(stderr, str):
            stderr = stderr.encode('utf-8')
        self.responses.append((list(prefix), returncode, stdout, stderr))
        return self

    def run(self, args, interactive=False):
        args = [str(arg) for arg in args]
        self.calls.append(args)
        for prefix, returncode, stdout, stderr in reversed(self.responses):
            if args[:len(prefix)] == prefix:
                if interactive:
                    return CommandResult(args, returncode)
                return CommandResult(args, returncode, stdout, stderr)
        return CommandResult(args, 0)

    def calls_matching(self, *prefix):
        prefix = list(prefix)
        return [call for call in self.calls if call[:len(prefix)] == prefix]


@pytest.fixture
def fake_runner():
    return FakeRunner()


@pytest.fixture
def ledger():
    return ResourceLedger()


@pytest.fixture
def settings():
    """Settings with no PATH requirements so tests never depend on installed tools"""
    return Settings(required_tools=())


@pytest.fixture
def kmp_project(tmp_path):
    """A minimal KMP project tree with Android and iOS app directories"""
    root = tmp_path / 'proj'
    (root / 'composeApp' / 'src' / 'androidMain').mkdir(parents=True)
    (root / 'iosApp').mkdir(parents=True)
    return root


@pytest.fixture
def remote(fake_runner):
    """
    A logged-in environment where the project does not exist yet and both
    apps register and download successfully
    """
    fake_runner.on('gcloud', 'auth', 'list', stdout='dev@example.com\n')
    fake_runner.on('firebase', 'projects:list', stdout=cli_json([]))
    fake_runner.on('gcloud', 'projects', 'list', stdout='')
    fake_runner.on('firebase', 'apps:list', stdout=cli_json([]))
    fake_runner.on('firebase', 'apps:create', 'android', stdout=cli_json({'appId': ANDROID_APP_ID}))
    fake_runner.on('firebase', 'apps:create', 'ios', stdout=cli_json({'appId': IOS_APP_ID}))
    fake_runner.on('firebase', 'apps:sdkconfig', 'android', stdout=ANDROID_SDKCONFIG)
    fake_runner.on('firebase', 'apps:sdkconfig', 'ios', stdout=IOS_SDKCONFIG)
    return fake_runner
