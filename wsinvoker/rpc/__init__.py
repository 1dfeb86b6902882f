"""RPC runtime: transport binding, dispatcher and the Invoker surface."""

from wsinvoker.rpc.binding import TransportBinding
from wsinvoker.rpc.dispatcher import Dispatcher
from wsinvoker.rpc.invoker import Invoker

__all__ = ["Invoker", "Dispatcher", "TransportBinding"]
