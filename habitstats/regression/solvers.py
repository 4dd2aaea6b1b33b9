"""
Solver dispatch for habit regression.

This module provides the public entry points and backend selection:
    fit(): raises the typed reason when a regression cannot be run
    compute_regression(): the same pipeline, with every refusal
        collapsed to None
"""

import logging
from typing import Literal

from habitstats.core.exceptions import DegreesOfFreedomError, HabitStatsError
from habitstats.core.compute.timing import Timer
from habitstats.regression._common import DEFAULT_CONFIG, RegressionConfig
from habitstats.regression._inference import infer
from habitstats.regression.design import RegressionDesign, RegressionInput
from habitstats.regression.solution import RegressionOutput
from habitstats.regression.backends.cpu import CPUNormalEquationsBackend, CPUQRBackend

logger = logging.getLogger(__name__)

# Type alias for backend selection
BackendChoice = Literal['auto', 'cpu', 'cpu_normal_equations', 'cpu_qr']


def fit(
    regression_input: RegressionInput,
    *,
    config: RegressionConfig | None = None,
    backend: BackendChoice = 'auto',
) -> RegressionOutput:
    """
    Regress daily sentiment on habit completion.

    Solves the ordinary least squares problem
        min_β ||y - Xβ||²
    with X = [1 | habit columns], then attaches standard errors,
    t-statistics and two-tailed p-values to each habit.

    Args:
        regression_input: Habit labels, column-major completion matrix,
            sentiment scores and completion rates
        config: Thresholds; DEFAULT_CONFIG when omitted
        backend: Computational backend to use:
            - 'auto' / 'cpu' / 'cpu_normal_equations': Gram matrix and
              Gaussian elimination with partial pivoting
            - 'cpu_qr': QR decomposition of X

    Returns:
        RegressionOutput with per-habit coefficients in input order

    Raises:
        ValidationError: If inputs are malformed
        DimensionError: If labels, rates and matrix sizes disagree
        InsufficientObservationsError: Too few days
        InsufficientVarianceError: Too few habits that vary
        SingularMatrixError: If the design is singular or ill-conditioned
        DegreesOfFreedomError: If n <= number of parameters

    Example:
        >>> from habitstats.regression import RegressionInput, fit
        >>> data = RegressionInput.from_rows(
        ...     ['Meditation', 'Reading'], ['🧘', '📖'], rows, sentiment)
        >>> output = fit(data)
        >>> print(output.summary())
    """
    if config is None:
        config = DEFAULT_CONFIG

    # === Select Backend ===
    backend_impl = _get_backend(backend, config)

    timer = Timer()
    timer.start()

    # === Construct Design ===
    # This is the boundary - validate here, trust everywhere else
    with timer.section('design'):
        design = RegressionDesign.build(regression_input, config)

    if design.df_residual <= 0:
        raise DegreesOfFreedomError(
            f"No residual degrees of freedom: n={design.n}, parameters={design.p}",
            df_residual=design.df_residual,
        )

    # === Solve ===
    result = backend_impl.solve(design)

    # === Inference ===
    with timer.section('inference'):
        inference = infer(result.params, design.n)

    timer.stop()
    timing = timer.result()
    if result.timing:
        timing.update({f"{backend_impl.name}.{k}": v for k, v in result.timing.items()})

    warnings: tuple[str, ...] = ()
    if design.dropped_habits:
        warnings = (
            f"Excluded habits with no variance: {', '.join(design.dropped_habits)}",
        )

    # === Wrap and Return ===
    return RegressionOutput.from_result(
        result, design, inference, config, warnings=warnings, timing=timing
    )


def compute_regression(
    regression_input: RegressionInput,
    *,
    config: RegressionConfig | None = None,
    backend: BackendChoice = 'auto',
) -> RegressionOutput | None:
    """
    Regress daily sentiment on habit completion, or decline.

    Same pipeline as fit(). Every data-driven refusal (too few days, too
    few varying habits, singular design, no degrees of freedom, malformed
    input) returns None; the cause is logged at DEBUG level only.

    Returns:
        RegressionOutput, or None when the data cannot support inference
    """
    try:
        return fit(regression_input, config=config, backend=backend)
    except HabitStatsError as e:
        logger.debug("Regression declined (%s): %s", e.reason, e)
        return None


class RegressionService:
    """
    Regression bound to a configuration and backend.

    Stateless after construction, so one instance can serve concurrent
    callers.
    """

    def __init__(
        self,
        config: RegressionConfig | None = None,
        backend: BackendChoice = 'auto',
    ):
        self.config = config if config is not None else DEFAULT_CONFIG
        # Fail on an unknown backend here, not on first use
        _get_backend(backend, self.config)
        self.backend = backend

    def compute_regression(self, regression_input: RegressionInput) -> RegressionOutput | None:
        return compute_regression(regression_input, config=self.config, backend=self.backend)

    def fit(self, regression_input: RegressionInput) -> RegressionOutput:
        return fit(regression_input, config=self.config, backend=self.backend)


def _get_backend(choice: BackendChoice, config: RegressionConfig):
    """
    Select and instantiate the appropriate backend.

    Raises:
        ValueError: If unknown backend specified
    """
    if choice in ('auto', 'cpu', 'cpu_normal_equations'):
        return CPUNormalEquationsBackend(pivot_tolerance=config.pivot_tolerance)

    elif choice == 'cpu_qr':
        return CPUQRBackend(pivot_tolerance=config.pivot_tolerance)

    else:
        raise ValueError(f"Unknown backend: {choice!r}")
