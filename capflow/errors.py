"""
capflow/errors.py

Exceptions raised by the solver. Everything derives from FlowError so a caller
can catch the whole family at once.
"""


class FlowError(Exception):
    pass


class InvalidArgument(FlowError, ValueError):
    """Bad capacity table, bad source/sink, or bad option. Raised before solving."""


class IterationLimitExceeded(FlowError, RuntimeError):
    """A caller-supplied max_iterations cap was hit before the flow converged."""

    def __init__(self, limit, flow_so_far):
        super().__init__(
            f"no convergence after {limit} augmentations (flow so far: {flow_so_far})"
        )
        self.limit = limit
        self.flow_so_far = flow_so_far
