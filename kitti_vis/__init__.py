from . import utils, visualization
from .errors import ViewerError, DatasetOpenError, FrameReadError, IndexOutOfRange
from .navigation import NavigationStateMachine, SessionState
from .session import SessionController, CAMERA_VIEWS
