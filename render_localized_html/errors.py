class LocalizeError(Exception):
    """Base class for every fatal error raised while rendering a site."""


class NotFoundError(LocalizeError):
    def __init__(self, path, kind="file"):
        self.path = path
        self.kind = kind
        super().__init__(f"{kind} not found: {path}")


class ParseError(LocalizeError):
    pass


class ResolutionError(LocalizeError):
    pass


class BuildError(LocalizeError):
    def __init__(self, path, error):
        self.path = path
        self.error = error
        super().__init__(f"Failed to write {path}: {error}")


class BuildCancelled(LocalizeError):
    pass
