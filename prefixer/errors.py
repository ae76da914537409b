"""Error taxonomy for the prefix pipeline."""


class PrefixerError(Exception):
    """Base error for the project."""


class PathNotFoundError(PrefixerError, FileNotFoundError):
    """The source folder is missing or not a directory. Aborts the run."""


class DirectoryCreateError(PrefixerError, OSError):
    """A required backup or log directory could not be created. Aborts the run."""


class BackupError(PrefixerError):
    pass


class RenameError(PrefixerError):
    pass


class QuarantineError(PrefixerError):
    pass


class ConfigError(PrefixerError, ValueError):
    pass
