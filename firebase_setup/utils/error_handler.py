"""
Error Handler for Firebase KMP Setup
Centralized error taxonomy, logging and exit-code mapping
"""

import logging
import traceback

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_FAILURE = 1


class SetupError(Exception):
    """Base exception class for the provisioning workflow"""
    def __init__(self, message, step=None, error_code='SETUP_ERROR'):
        super().__init__(message)
        self.message = message
        self.step = step
        self.error_code = error_code
        self.exit_code = EXIT_FAILURE


class ProjectLayoutError(SetupError):
    """Raised when the KMP project tree or an operator answer is unusable"""
    def __init__(self, message, path=None, step=None):
        super().__init__(message, step=step, error_code='ENVIRONMENT_ERROR')
        self.path = path


class ToolingError(SetupError):
    """Raised when required executables are missing from PATH"""
    def __init__(self, message, missing=None, step=None):
        super().__init__(message, step=step, error_code='TOOLING_ERROR')
        self.missing = list(missing or [])


class AuthenticationError(SetupError):
    """Raised when gcloud or Firebase CLI login fails"""
    def __init__(self, message, step=None):
        super().__init__(message, step=step, error_code='AUTH_ERROR')


class RemoteCallError(SetupError):
    """Raised when a gcloud/firebase call reports failure"""
    def __init__(self, message, command=None, stderr=None, step=None, error_code='REMOTE_CALL_ERROR'):
        super().__init__(message, step=step, error_code=error_code)
        self.command = command
        self.stderr = stderr


class ResponseShapeError(RemoteCallError):
    """Raised when a parsed response lacks an expected field"""
    def __init__(self, message, command=None, raw=None, step=None):
        super().__init__(message, command=command, step=step, error_code='RESPONSE_SHAPE_ERROR')
        self.raw = raw


class PostConditionError(SetupError):
    """Raised when an expected output file is absent after a write"""
    def __init__(self, message, path=None, step=None):
        super().__init__(message, step=step, error_code='POST_CONDITION_ERROR')
        self.path = path


def handle_error(error):
    """
    Central error handler that logs an exception and converts it to an exit code
    """
    try:
        if isinstance(error, SetupError):
            step = f" [{error.step}]" if error.step else ""
            logger.error(f"Setup failed{step}: {error.message}")
            stderr = getattr(error, 'stderr', None)
            if stderr:
                logger.error(stderr.rstrip())
            return error.exit_code

        elif isinstance(error, KeyboardInterrupt):
            logger.warning("Interrupted. Remote resources created so far were left in place.")
            return EXIT_FAILURE

        else:
            logger.error(f"Unexpected error: {str(error)}")
            logger.error(traceback.format_exc())
            return EXIT_FAILURE

    except Exception as e:
        logger.critical(f"Error in error handler: {str(e)}")
        return EXIT_FAILURE


def require_answer(value, prompt_name):
    """
    Validate that an operator answer is present and return it stripped
    """
    cleaned = (value or '').strip()
    if not cleaned:
        raise ProjectLayoutError(f"A value for '{prompt_name}' is required", step='prompt')
    return cleaned
