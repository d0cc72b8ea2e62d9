"""
Tolerance tiers and engine defaults.

Defines the precision expectations used by the engines and the test suite:
- DEFAULT: relative comparisons on well-conditioned double precision results
- STRUCTURE: absolute entry test for zero/diagonal/triangular/identity checks

EngineConfig groups the iteration budgets of the eigen solvers so callers
can override them per call without touching module constants.
"""

from dataclasses import dataclass

from pymatrix.core.compute.precision import EPSILON_64


@dataclass(frozen=True)
class ToleranceTier:
    """Tolerance tier for numerical comparison."""
    rtol: float
    atol: float
    name: str
    description: str


# Default relative tolerance for symmetric detection and Jacobi convergence
DEFAULT = ToleranceTier(
    rtol=1e-10,
    atol=1e-12,
    name='default',
    description='Double precision, well-conditioned input',
)

# Entry-wise structure checks (same threshold the calculator front-end shows)
STRUCTURE = ToleranceTier(
    rtol=0.0,
    atol=1e-10,
    name='structure',
    description='Absolute zero test for structural properties',
)

# Above this condition number results are flagged as possibly inaccurate.
HIGH_CONDITION_THRESHOLD = 1e6

# Above this condition number the operand is treated as near-singular.
# At 1e12 roughly four significant digits survive in float64.
NEAR_SINGULAR_THRESHOLD = 1e12


@dataclass(frozen=True)
class EngineConfig:
    """
    Iteration budgets and convergence tolerances for the eigen solvers.

    Attributes:
        tolerance: Relative tolerance for Jacobi convergence (off-diagonal
            Frobenius mass relative to the matrix norm)
        deflation_tolerance: Relative size below which a Hessenberg
            sub-diagonal entry is treated as zero
        jacobi_max_sweeps: Sweep budget for the Jacobi method; one sweep is
            n(n-1)/2 rotations
        qr_iterations_per_eigenvalue: Shifted QR budget is this times n
        exceptional_shift_interval: Apply an ad hoc shift after this many
            iterations without a deflation
        svd_tolerance: Jacobi tolerance used on AᵀA inside the SVD; tighter
            than `tolerance` because U is formed from A·V / σ
    """
    tolerance: float = DEFAULT.rtol
    deflation_tolerance: float = EPSILON_64
    svd_tolerance: float = 1e-13
    jacobi_max_sweeps: int = 30
    qr_iterations_per_eigenvalue: int = 100
    exceptional_shift_interval: int = 10

    def max_qr_iterations(self, n: int) -> int:
        """Hard iteration cap for the shifted QR algorithm on an n x n matrix."""
        return self.qr_iterations_per_eigenvalue * max(n, 1)

    def max_jacobi_rotations(self, n: int) -> int:
        """Hard rotation cap for the Jacobi method on an n x n matrix."""
        return self.jacobi_max_sweeps * max(n * (n - 1) // 2, 1)


DEFAULT_CONFIG = EngineConfig()

