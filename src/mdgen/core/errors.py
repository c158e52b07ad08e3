"""Engine error types"""


class InvalidInputError(ValueError):
    """A caller supplied a path the engine cannot work with (empty, bare root, no file name)."""

    def __init__(self, message: str, path: str):
        super().__init__(f"{message}: {path!r}")
        self.path = path


class MalformedMetadataError(ValueError):
    """A document header parsed as YAML but does not have the expected shape."""
