from .core import *  # noqa: F401,F403
from .commands import command_list_configs, command_list_sdks, command_translate

__version__ = TOOL_VERSION  # noqa: F405
