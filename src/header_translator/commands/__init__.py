from .inspection import command_list_configs, command_list_sdks
from .translation import command_translate

__all__ = [
    "command_list_configs",
    "command_list_sdks",
    "command_translate",
]
