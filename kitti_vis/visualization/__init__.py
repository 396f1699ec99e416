from .visualizer2d import Visualizer2D
from .scene import SceneRenderer
from .layers import LayerVisibilityController, LAYERS, \
    RAW_CLOUD, BOUNDING_BOXES, CROPPED_TRACKLETS, CENTERED_SELECTION
