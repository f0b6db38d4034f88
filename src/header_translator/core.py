from __future__ import annotations

from ._core_base import *  # noqa: F401,F403
from ._core_sdk import *  # noqa: F401,F403
from ._core_config import *  # noqa: F401,F403
from ._core_model import *  # noqa: F401,F403
from ._core_locator import *  # noqa: F401,F403
from ._core_statements import *  # noqa: F401,F403
from ._core_session import *  # noqa: F401,F403
from ._core_visitor import *  # noqa: F401,F403
from ._core_compare import *  # noqa: F401,F403
from ._core_output import *  # noqa: F401,F403
from ._core_orchestration import *  # noqa: F401,F403
