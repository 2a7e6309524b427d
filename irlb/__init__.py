from .status import IRLBStatus, IRLBError
from .workspace import IRLBWorkspace
from .linalg import BlasBackend, NumpyBackend, get_backend, orthog
from .convergence import convtests
from .solver import irlb, irlb_core, IRLBResult, valid_dimensions, DEFAULT_MAXIT, DEFAULT_TOL, DEFAULT_EXTRA_WORK
from .comparisons import compare_with_dense_svd, triplet_residuals, orthonormality_defect
from .matrices import planted_spectrum_matrix, planted_rank_matrix, rank_deficient_diagonal
from .plotting import plot_convergence, plot_singular_values
