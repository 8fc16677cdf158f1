"""
emitkit: A small synchronous event emitter with decorator-based listeners.
"""

__version__ = "0.1.0"
__license__ = "MIT"

from .bucket import Listener
from .emitter import EventEmitter
from .errors import EmitKitError, InvalidListenerError
from .keys import Symbol
from .decorators import OnEvent, bind_listeners, unbind_listeners
from .logging import LoggerManager, get_emitkit_logger
from .settings import EmitterSettings, setup
