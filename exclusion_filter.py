import fnmatch
import os


class ExclusionFilter:
    """
    Decides whether a whole file is excluded by the configured glob patterns.
    A pattern may match the full path or just the file name.
    """

    def __init__(self, patterns=()):
        self.patterns = tuple(patterns)

    def should_exclude(self, path) -> bool:
        if not self.patterns or not path:
            return False
        base = os.path.basename(path)
        for pattern in self.patterns:
            if fnmatch.fnmatchcase(path, pattern):
                return True
            if fnmatch.fnmatchcase(base, pattern):
                return True
        return False
