"""
errors.py

Exception types raised while building and consuming a precedence graph.
All of them are ValueError subclasses, so callers can catch ValueError.
"""


class StepError(ValueError):
    """Base class for stepsched errors."""


class MalformedInput(StepError):
    """A precedence record could not be decoded into a (required, step) pair."""


class CycleDetected(StepError):
    """
    The remaining graph still has nodes but none of them can ever start.

    Attributes:
      - remaining (list of Step): the steps left in the graph, sorted
    """
    def __init__(self, remaining):
        self.remaining = sorted(remaining)
        names = "".join(str(s) for s in self.remaining)
        super().__init__(f"Cycle detected in dependencies; {len(self.remaining)} step(s) stuck: {names}")


class InvalidParameters(StepError):
    """Scheduler called with a worker count below 1 or a negative base time."""
