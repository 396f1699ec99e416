""" error kinds of the viewer
"""


class ViewerError(Exception):
    pass


class DatasetOpenError(ViewerError):
    """ the storage of a data set is missing or unreadable
    """
    pass


class FrameReadError(ViewerError):
    """ the requested frame is out of range or its file is missing
    """
    pass


class IndexOutOfRange(ViewerError):
    """ internal, every navigation index is clamped before it is used
    """
    pass
