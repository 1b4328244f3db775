import logging


class Tracer:
    """Sink for the journey of each converted symbol. Every hook is a no-op."""

    def step(self, window: str):
        pass

    def stage(self, label: str, symbol: str):
        pass

    def done(self):
        pass


class LoggingTracer(Tracer):
    """Log one line per symbol, e.g. ``[AAB] A -> A -> ... -> B``."""

    def __init__(self, logger: logging.Logger = None):
        self.logger = logger or logging.getLogger(__name__)
        self._window = ''
        self._symbols = []

    def step(self, window: str):
        self._window = window
        self._symbols = []

    def stage(self, label: str, symbol: str):
        self._symbols.append(symbol)

    def done(self):
        self.logger.debug('[%s] %s', self._window, ' -> '.join(self._symbols))


class RecordingTracer(Tracer):
    def __init__(self):
        self.records = []

    def step(self, window: str):
        self.records.append((window, []))

    def stage(self, label: str, symbol: str):
        self.records[-1][1].append((label, symbol))
