from pathlib import Path
from typing import Union


class SlurpError(Exception):
    # base exception for all slurp errors.
    pass

class InvalidConfigurationError(SlurpError):
    # bad base directory, predicate, exclusion list or target.
    pass

class ConfigError(SlurpError):
    # errors reading or parsing configuration files.
    pass

class UnauthorizedDirectoryError(SlurpError):
    # a target directory falls outside every allowed root.
    def __init__(self, directory: Union[str, Path]):
        self.directory = str(directory)
        super().__init__(f"directory is not within any allowed root: {self.directory}")

class DumpError(SlurpError):
    # errors writing the loaded-files dump.
    pass

class LoadError(SlurpError):
    # a source file raised while it was being executed.
    def __init__(self, path: Union[str, Path], cause: BaseException):
        self.path = str(path)
        self.cause = cause
        super().__init__(f"failed to load '{self.path}': {cause}")
