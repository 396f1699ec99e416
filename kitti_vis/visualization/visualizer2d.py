import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt, numpy as np
from ..data_protos import BBox


class Visualizer2D:
    """ bird's-eye rendering of a frame, written to an image file
    """
    def __init__(self, name='', figsize=(8, 8)):
        self.figure = plt.figure(name, figsize=figsize)
        plt.axis('equal')
        self.COLOR_MAP = {
            'gray': np.array([140, 140, 136]) / 256,
            'light_blue': np.array([4, 157, 217]) / 256,
            'red': np.array([191, 4, 54]) / 256,
            'black': np.array([0, 0, 0]) / 256,
            'purple': np.array([224, 133, 250]) / 256,
            'dark_green': np.array([32, 64, 40]) / 256,
            'green': np.array([77, 115, 67]) / 256
        }

    def _color(self, color):
        if isinstance(color, str):
            return self.COLOR_MAP[color]
        return np.array(color) / 255

    def close(self):
        plt.close(self.figure)

    def save(self, path):
        self.figure.savefig(path)

    def handler_pc(self, pc, color='gray'):
        vis_pc = np.asarray(pc)
        plt.scatter(vis_pc[:, 0], vis_pc[:, 1], marker='o', color=self._color(color), s=0.01)

    def handler_box(self, box: BBox, message: str='', color='red', linestyle='solid'):
        corners = np.array(BBox.box2corners2d(box))[:, :2]
        corners = np.concatenate([corners, corners[0:1, :2]])
        plt.plot(corners[:, 0], corners[:, 1], color=self._color(color), linestyle=linestyle)
        # heading marker: from the center to the middle of the front edge
        front = (corners[0] + corners[1]) / 2
        plt.plot([box.x, front[0]], [box.y, front[1]], color=self._color(color), linestyle=linestyle)
        plt.text(corners[0, 0], corners[0, 1], message, color=self._color(color))
