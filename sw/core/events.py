from sw.common.logger import log

# Named notification channels, each holding an ordered list of callbacks. Emission is synchronous and in
# registration order, there is no queue.
class EventEmitter:

    def __init__(self, names):
        self._listeners = {name: [] for name in names}

    def _channel(self, name):
        try:
            return self._listeners[name]
        except KeyError:
            raise ValueError(f"Unknown event '{name}', expected one of: {', '.join(self._listeners)}") from None

    # The same callback may be registered more than once, in which case it fires once per registration.
    def on(self, name, callback):
        if not callable(callback):
            raise TypeError(f"Listener for '{name}' must be callable, got {callback!r}")
        self._channel(name).append(callback)
        log.debug(f"Registered listener {callback!r} for '{name}'")
    # Removes the earliest matching registration, quietly does nothing if there isn't one.
    def off(self, name, callback):
        channel = self._channel(name)
        if callback in channel:
            channel.remove(callback)
            log.debug(f"Removed listener {callback!r} from '{name}'")

    # Iterates over a copy so listeners can subscribe/unsubscribe while the event is being delivered.
    def emit(self, name):
        for callback in list(self._channel(name)):
            callback()

    def listener_count(self, name):
        return len(self._channel(name))
