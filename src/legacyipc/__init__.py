""" Python implementation of the legacy IPC bridge. A legacy client connects
    over TCP and sends typed, tagged JSON messages; the bridge decodes them,
    hands each to the handler registered for its kind, and sends back the
    handler's typed response. The one message kind served today is a
    difficulty calculation request for a chart.
"""

# Utility components.

from . import json
from . import log
from . import config

# Submodules used by multiple other components.

from . import protocol
from . import difficulty
from . import transport

# Primary public-facing interfaces.

from . import bridge
from .bridge import Bridge, build_registry
from .config import Config

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
