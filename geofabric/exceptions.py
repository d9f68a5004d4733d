"""Exceptions raised while locating, reading or writing Geofabric data."""


class GeofabricError(Exception):
    """Base class for geofabric errors."""


class DatasetNotFoundError(GeofabricError, FileNotFoundError):
    """None of the candidate locations for a dataset exist.

    Parameters
    ----------
    candidates : sequence of paths
        Every location that was checked, in the order checked.
    label : str, optional
        Name of the dataset for the message (e.g. 'stream').
    """
    def __init__(self, candidates, label='Geofabric'):
        self.candidates = list(candidates)
        self.label = label
        message = ('{} data not found. Please ensure geofabric data is downloaded.\n'
                   'Expected locations:\n{}'.format(label.capitalize(),
                                                    '\n'.join(str(c) for c in self.candidates)))
        super().__init__(message)


class MalformedSourceError(GeofabricError, ValueError):
    """A dataset exists but can't be read as vector features."""
    def __init__(self, message, path=None):
        self.path = path
        super().__init__(message)


class ExportError(GeofabricError, OSError):
    """Features couldn't be written to the requested output."""
    def __init__(self, message, path=None):
        self.path = path
        super().__init__(message)
