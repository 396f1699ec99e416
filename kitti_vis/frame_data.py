""" the data of the frame currently on screen
"""
import numpy as np


class FrameData:
    def __init__(self, frame_index, pc, image_path=None):
        self.frame_index = frame_index
        self.pc = pc                   # N * 4, x y z intensity
        self.image_path = image_path   # left color camera image of the same frame

    @property
    def xyz(self):
        return np.ascontiguousarray(self.pc[:, :3])

    def __len__(self):
        return self.pc.shape[0]
