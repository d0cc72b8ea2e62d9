"""
Dense linear algebra engines for PyMatrix.

All engines follow these conventions:
    - Computation runs on float64 NumPy arrays; inputs and outputs are Matrix
    - Decompositions return a frozen result dataclass
    - Shape errors are raised before any arithmetic
    - Overflow anywhere raises NumericOverflowError, never a partial result

Submodules:
    lu: Gaussian elimination, determinant, rank, solve, inverse
    qr: Householder QR
    eigen: Jacobi (symmetric) and shifted QR (general) eigenvalues
    svd: Singular value decomposition via the symmetric eigenproblem
    stability: Norms, condition number, stability score
    arithmetic: Sums, products, trace and integer powers
"""

from pymatrix.core.compute.linalg.lu import (
    LUResult,
    lu_decompose,
    determinant,
    rank,
    solve,
    inverse,
)
from pymatrix.core.compute.linalg.qr import QRResult, qr_decompose
from pymatrix.core.compute.linalg.eigen import (
    EigenResult,
    eigenvalues,
    eigh_jacobi,
    eig_qr,
)
from pymatrix.core.compute.linalg.svd import SVDResult, svd_decompose, singular_values
from pymatrix.core.compute.linalg.stability import (
    frobenius_norm,
    one_norm,
    inf_norm,
    spectral_norm,
    condition_number,
    condition_from_singular_values,
    stability_score,
    sparsity,
    is_near_singular,
)
from pymatrix.core.compute.linalg.arithmetic import (
    add,
    subtract,
    multiply,
    transpose,
    trace,
    power,
)

__all__ = [
    # Elimination
    "LUResult",
    "lu_decompose",
    "determinant",
    "rank",
    "solve",
    "inverse",
    # QR
    "QRResult",
    "qr_decompose",
    # Eigen
    "EigenResult",
    "eigenvalues",
    "eigh_jacobi",
    "eig_qr",
    # SVD
    "SVDResult",
    "svd_decompose",
    "singular_values",
    # Stability
    "frobenius_norm",
    "one_norm",
    "inf_norm",
    "spectral_norm",
    "condition_number",
    "condition_from_singular_values",
    "stability_score",
    "sparsity",
    "is_near_singular",
    # Arithmetic
    "add",
    "subtract",
    "multiply",
    "transpose",
    "trace",
    "power",
]
