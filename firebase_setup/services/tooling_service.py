"""
Tooling Service for Firebase KMP Setup
Checks that the executables the workflow shells out to are on PATH
"""

import logging

from firebase_setup.utils.command_runner import is_tool_available
from firebase_setup.utils.error_handler import ToolingError

logger = logging.getLogger(__name__)

INSTALL_HINTS = {
    'brew': '/bin/bash -c "$(curl -fsSL https://raw.githubusercontent.com/Homebrew/install/HEAD/install.sh)"',
    'node': 'brew install node  (Linux: https://deb.nodesource.com/setup_lts.x, then apt-get install nodejs)',
    'gcloud': 'brew install --cask google-cloud-sdk  (Linux: apt-get install google-cloud-sdk)',
    'firebase': 'npm install -g firebase-tools',
    'jq': 'brew install jq  (Linux: apt-get install jq)',
}


class ToolingService:
    def __init__(self, checker=is_tool_available):
        self.checker = checker

    def check_tools(self, names):
        """
        Return {tool: present} for every requested tool, in order
        """
        return {name: bool(self.checker(name)) for name in names}

    def ensure_tools(self, names):
        """
        Abort with install hints when any required tool is missing
        """
        presence = self.check_tools(names)
        missing = [name for name, present in presence.items() if not present]

        for name, present in presence.items():
            if present:
                logger.debug(f"Found {name}")

        if missing:
            lines = [f"Required tools not found: {', '.join(missing)}"]
            for name in missing:
                hint = INSTALL_HINTS.get(name)
                if hint:
                    lines.append(f"  {name}: {hint}")
            raise ToolingError('\n'.join(lines), missing=missing, step='tools')

        logger.info(f"Found required tools: {', '.join(presence) or 'none'}")
        return presence
