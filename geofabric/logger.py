"""Logging of Geofabric extraction runs to a text file.

Adapted from the logger.py module in the pyemu project
Copyright (c) 2014
https://github.com/jtwhite79/pyemu
"""
from datetime import datetime
from pathlib import Path
import warnings
import geofabric


class Logger(object):
    """Write timestamped workflow events to a log file,
    optionally echoing them to the screen.

    Parameters
    ----------
    filename : str, pathlike or file handle
        Log file, by default 'geofabric.logger' in the
        current working directory.
    mode : str {'w', 'a'}
        Start a new log file ('w'), or append to an existing one ('a').
        A new file starts with the geofabric version.
    echo : bool
        Print each entry as it is written.

    Attributes
    ----------
    filename : str
    f : file handle
    started : dict
        Start times of the steps passed to :meth:`log` that
        haven't finished yet, keyed by step description.
    """
    def __init__(self, filename='geofabric.logger', mode='w', echo=False):
        self.started = {}
        self.echo = bool(echo)
        if isinstance(filename, (str, Path)):
            self.filename = str(filename)
            append = mode == 'a' and Path(filename).exists()
            self.f = open(filename, 'a' if append else 'w')
            if not append:
                self.statement('geofabric v. {}'.format(geofabric.__version__),
                               log_time=False)
        else:
            self.f = filename
            self.filename = filename.name

    def _write(self, text, echo=None):
        echo = self.echo if echo is None else echo
        if echo:
            print(text, end='')
        if not self.f.closed:
            self.f.write(text)
            self.f.flush()

    def statement(self, phrase, log_time=True, echo=None):
        """Write a one-time entry, prefixed with the time unless
        log_time is False."""
        prefix = '{} '.format(datetime.now()) if log_time else ''
        self._write('{}{}\n'.format(prefix, phrase), echo=echo)

    def log(self, phrase):
        """Mark the start of a step the first time phrase is passed,
        and its finish (with the elapsed time) the second time."""
        now = datetime.now()
        start = self.started.pop(phrase, None)
        if start is None:
            self.started[phrase] = now
            self._write('{} starting: {}\n'.format(now, phrase))
        else:
            self._write('{} finished: {} took: {}\n'.format(now, phrase, now - start))

    def warn(self, message):
        """Write a warning to the log file, and issue
        it as a :class:`RuntimeWarning`."""
        self._write('{} WARNING: {}\n'.format(datetime.now(), message))
        warnings.warn(message, RuntimeWarning)

    def lraise(self, exception):
        """Write an error to the log file, close the file,
        then raise the error.

        Parameters
        ----------
        exception : str or Exception instance
            Exception to raise; a string is raised as a generic Exception.
        """
        if isinstance(exception, str):
            exception = Exception(exception)
        self._write('{} ERROR: {}\n'.format(datetime.now(), exception), echo=True)
        self.close()
        raise exception

    def close(self):
        if not self.f.closed:
            self.f.close()
