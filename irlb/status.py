from enum import IntEnum



class IRLBError(RuntimeError):
    """Raised by IRLBResult.check() when a run did not succeed."""

    def __init__(self, status, message=None):
        self.status = IRLBStatus(status)
        if message is None:
            message = self.status.message
        super().__init__(message)



class IRLBStatus(IntEnum):
    """Return codes of the IRLB iteration.

    The integer values are stable, so they can be stored or passed across
    language boundaries as plain integers.
    """
    SUCCESS = 0
    INVALID_INPUT = -1
    NOT_CONVERGED = -2
    OUT_OF_MEMORY = -3  # never produced, buffers are allocated up front
    NEAR_NULL_SPACE = -4
    LINEAR_DEPENDENCE = -5

    @property
    def message(self):
        return _MESSAGES[self]

    @property
    def ok(self):
        return self is IRLBStatus.SUCCESS



_MESSAGES = {
    IRLBStatus.SUCCESS: "converged",
    IRLBStatus.INVALID_INPUT: "invalid input dimensions or parameters",
    IRLBStatus.NOT_CONVERGED: "did not converge within maxit iterations",
    IRLBStatus.OUT_OF_MEMORY: "could not allocate working storage",
    IRLBStatus.NEAR_NULL_SPACE: "starting vector near the null space of A",
    IRLBStatus.LINEAR_DEPENDENCE: "linear dependence encountered in the Lanczos process",
}
