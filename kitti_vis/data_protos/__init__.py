from .bbox import BBox
from .tracklet import Pose, Tracklet
