"""Speech Say Package

This package wraps the operating system speech commands (say, festival,
powershell) behind a single controller with asynchronous completion.
"""

from speech_say.speech_controller import SpeechController
from speech_say.platforms import PLATFORMS, MACOS, LINUX, WIN32, PlatformProfile, get_profile
from speech_say.config import SayConfig, load_config
from speech_say.errors import (
    SayError, UnsupportedPlatform, MissingText, MissingFilename, ProcessStderr,
    ProcessFailed, NoActiveSpeech, SpeechBusy, SpawnError, ControllerClosed)

# Export public interfaces
__all__ = [
    'SpeechController',     # Main speech controller class
    'PLATFORMS',            # Platform identifiers for capability checks
    'MACOS',
    'LINUX',
    'WIN32',
    'PlatformProfile',      # Command and base rate of one platform
    'get_profile',
    'SayConfig',            # Controller configuration
    'load_config',
    'SayError',             # Base class of all speech errors
    'UnsupportedPlatform',
    'MissingText',
    'MissingFilename',
    'ProcessStderr',
    'ProcessFailed',
    'NoActiveSpeech',
    'SpeechBusy',
    'SpawnError',
    'ControllerClosed',
]
