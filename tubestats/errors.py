class DataFileError(Exception):
    """A source data file could not be read or has the wrong shape."""

    def __init__(self, path, message: str):
        super().__init__(f"{path}: {message}")
        self.path = path
        self.message = message
