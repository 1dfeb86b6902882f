"""wsinvoker - symmetric RPC over one duplex message channel."""

__version__ = "0.1.0"

from wsinvoker.config.schema import InvokerOptions
from wsinvoker.core.naming import SEPARATOR, ChannelRole
from wsinvoker.rpc.invoker import Invoker
from wsinvoker.transport.base import Transport

__all__ = [
    "__version__",
    "Invoker",
    "InvokerOptions",
    "Transport",
    "ChannelRole",
    "SEPARATOR",
]
