from bounded_rng.analysis.reducers import REDUCER_NAMES, modulo, multiply_shift, resolve_reducer
from bounded_rng.analysis.uniformity import UniformityReport, check_uniformity, expected_draws_per_sample

__all__ = [
    "REDUCER_NAMES",
    "UniformityReport",
    "check_uniformity",
    "expected_draws_per_sample",
    "modulo",
    "multiply_shift",
    "resolve_reducer",
]
