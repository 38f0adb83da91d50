class ImgorisortError(Exception):
    """Base error for the project."""


class ClassificationError(ImgorisortError):
    """Image dimensions could not be read."""


class InputRootError(ImgorisortError):
    pass


class SetupError(ImgorisortError):
    pass


class PlanMismatchError(ImgorisortError):
    pass
