""" oriented 3D box in world (velodyne) coordinates
    x, y, z is the geometric center, o is the yaw around the z axis
"""
import numpy as np
from pyquaternion import Quaternion


class BBox:
    def __init__(self, x=None, y=None, z=None, h=None, w=None, l=None, o=None):
        self.x = x      # center x
        self.y = y      # center y
        self.z = z      # center z
        self.h = h      # height
        self.w = w      # width
        self.l = l      # length
        self.o = o      # orientation

    def __str__(self):
        return '{:.2f}, {:.2f}, {:.2f}, {:.2f}, {:.2f}, {:.2f}, {:.2f}'.format(
            self.x, self.y, self.z, self.o, self.l, self.w, self.h)

    @classmethod
    def bbox2center(cls, bbox):
        return np.array([bbox.x, bbox.y, bbox.z])

    @classmethod
    def bbox2extents(cls, bbox):
        return np.array([bbox.l, bbox.w, bbox.h])

    @classmethod
    def bbox2quaternion(cls, bbox):
        """ the yaw of the box as a rotation about the vertical axis
        """
        return Quaternion(axis=[0, 0, 1], angle=bbox.o)

    @classmethod
    def box2corners2d(cls, bbox):
        """ the bottom four corners, counter-clockwise starting at front-right
        """
        bottom_z = bbox.z - bbox.h / 2
        cos, sin = np.cos(bbox.o), np.sin(bbox.o)
        pc0 = np.array([bbox.x + cos * bbox.l / 2 + sin * bbox.w / 2,
                        bbox.y + sin * bbox.l / 2 - cos * bbox.w / 2,
                        bottom_z])
        pc1 = np.array([bbox.x + cos * bbox.l / 2 - sin * bbox.w / 2,
                        bbox.y + sin * bbox.l / 2 + cos * bbox.w / 2,
                        bottom_z])
        pc2 = 2 * np.array([bbox.x, bbox.y, bottom_z]) - pc0
        pc3 = 2 * np.array([bbox.x, bbox.y, bottom_z]) - pc1
        return [pc0.tolist(), pc1.tolist(), pc2.tolist(), pc3.tolist()]
