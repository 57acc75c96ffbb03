from capflow.errors import FlowError, InvalidArgument, IterationLimitExceeded
from capflow.graph import CapacityGraph, DenseResidual, SparseResidual, example_graph, residual_from
from capflow.solver import (
    NO_PARENT,
    FlowResult,
    augment,
    bottleneck,
    compute_max_flow,
    find_augmenting_path,
    path_from_parents,
    solve,
)

__version__ = "0.1.0"
