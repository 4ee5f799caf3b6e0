"""
copynotice Errors

Every error is unrecoverable at the point it occurs and aborts the run.
"""


class CopyNoticeError(Exception):
    """Base class for copynotice errors"""


class ConfigError(CopyNoticeError):
    """Invalid or missing configuration"""


class TraversalError(CopyNoticeError):
    """Directory or file enumeration failed for a reason other than 'no matches'"""

    def __init__(self, message: str, path: str = ""):
        super().__init__(message)
        self.path = path


class NoticeIOError(CopyNoticeError):
    """An operation on a specific file or directory failed"""

    def __init__(self, message: str, path: str = ""):
        super().__init__(message)
        self.path = path
