"""Exception hierarchy for Cartoclip."""


class CartoclipError(Exception):
    """Base exception for all Cartoclip errors."""

    pass


class MalformedPathError(CartoclipError):
    """A path or boundary violates the input contract."""

    pass


class NonFiniteCoordinateError(MalformedPathError):
    """A path contains NaN or infinite coordinates."""

    def __init__(self, value: float, where: str = "path") -> None:
        self.value = value
        self.where = where
        super().__init__(f"Non-finite coordinate {value!r} found in {where}")


class OpenPathError(MalformedPathError):
    """A path that must be closed is not."""

    def __init__(self, what: str, path_text: str) -> None:
        self.what = what
        self.path_text = path_text
        super().__init__(f"The {what} is not closed: {path_text}")


class ImpossibleArcError(MalformedPathError):
    """An arc segment whose geometry cannot exist."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Impossible arc: {reason}")


class UnsupportedSegmentError(MalformedPathError):
    """A segment kind was passed to an operation that cannot handle it."""

    def __init__(self, code: str, operation: str) -> None:
        self.code = code
        self.operation = operation
        super().__init__(f"'{code}' segments are not supported by {operation}")


class ConsistencyError(CartoclipError):
    """An internal invariant was broken, usually by an upstream bug."""

    pass


class MissingContinuationError(ConsistencyError):
    """Re-stitching could not find the section that continues a chain."""

    def __init__(self, s: float, t: float, reason: str) -> None:
        self.s = s
        self.t = t
        self.reason = reason
        super().__init__(f"Left hanging at [{s}, {t}]: {reason}")


class RedrawnSectionError(ConsistencyError):
    """Re-stitching reached a section that was already drawn."""

    def __init__(self, s: float, t: float, chain_start: tuple[float, float]) -> None:
        self.s = s
        self.t = t
        self.chain_start = chain_start
        super().__init__(
            f"The section starting at [{s}, {t}] was already drawn "
            f"(current chain started at [{chain_start[0]}, {chain_start[1]}])"
        )


class AmbiguousContainmentError(ConsistencyError):
    """A containment re-probe that should have been decisive was not."""

    def __init__(self, s: float, t: float) -> None:
        self.s = s
        self.t = t
        super().__init__(f"Containment of [{s}, {t}] could not be resolved")


class ConvergenceError(CartoclipError):
    """A bounded loop failed to converge."""

    pass


class LoopBudgetExceededError(ConvergenceError):
    """A bounded loop ran past its iteration budget."""

    def __init__(self, budget: int, context: str) -> None:
        self.budget = budget
        self.context = context
        super().__init__(f"Exceeded budget of {budget} iterations while {context}")


class PathIOError(CartoclipError):
    """Errors related to reading or writing path files."""

    pass


class PathLoadError(PathIOError):
    """Error loading a path file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load path '{path}': {reason}")


class PathSaveError(PathIOError):
    """Error saving a path file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to save path '{path}': {reason}")


class PathFormatError(PathIOError):
    """Path text or JSON that cannot be parsed."""

    def __init__(self, details: str) -> None:
        self.details = details
        super().__init__(f"Invalid path data: {details}")
