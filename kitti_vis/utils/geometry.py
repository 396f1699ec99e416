import numpy as np
import numba
from pyquaternion import Quaternion
from ..data_protos import BBox


__all__ = ['world_box', 'centering_transform', 'apply_centering', 'display_offset',
           'translate_points', 'rotate_points', 'make_transformation_matrix', 'pc_in_box',
           'TRACKLET_DISPLAY_OFFSET']


# lift of the cropped tracklet clouds above the frame cloud, cosmetic only
TRACKLET_DISPLAY_OFFSET = 6.0


def world_box(tracklet, frame_index):
    """ the oriented box of a tracklet at an absolute frame index
        the pose translation is the bottom center of the object, the box center is h / 2 above it
    Args:
        tracklet (Tracklet): frame_index has to lie in [first_frame, last_frame]
    Returns:
        BBox: center, yaw and extents in world coordinates
    """
    tpose = tracklet.pose_at(frame_index)
    return BBox(x=tpose.tx, y=tpose.ty, z=tpose.tz + tracklet.h / 2.0,
                h=tracklet.h, w=tracklet.w, l=tracklet.l, o=tpose.rz)


def centering_transform(tracklet, frame_index):
    """ translation and rotation that move the tracklet to the origin with its heading removed
        translate first, then rotate
    """
    tpose = tracklet.pose_at(frame_index)
    translation = -np.array([tpose.tx, tpose.ty, tpose.tz + tracklet.h / 2.0])
    rotation = Quaternion(axis=[0, 0, 1], angle=-tpose.rz)
    return translation, rotation


def apply_centering(points, translation, rotation):
    points = translate_points(points, translation)
    return rotate_points(points, rotation)


def display_offset(tracklet, offset=TRACKLET_DISPLAY_OFFSET):
    return np.array([0.0, 0.0, offset])


def translate_points(points, translation):
    """ shift the xyz columns, the other columns (intensity) are kept as they are
    """
    result = np.array(points, copy=True)
    result[:, :3] = result[:, :3] + np.asarray(translation, dtype=result.dtype)
    return result


def rotate_points(points, rotation: Quaternion):
    result = np.array(points, copy=True)
    rotation_matrix = rotation.rotation_matrix
    result[:, :3] = result[:, :3] @ rotation_matrix.T
    return result


def make_transformation_matrix(motion):
    """ 4 * 4 homogeneous matrix of a yaw rotation followed by a translation
    Args:
        motion: (x, y, z, theta)
    """
    x, y, z, theta = motion
    transformation_matrix = np.array([[np.cos(theta), -np.sin(theta), 0, x],
                                      [np.sin(theta),  np.cos(theta), 0, y],
                                      [0            ,  0            , 1, z],
                                      [0            ,  0            , 0, 1]])
    return transformation_matrix


def pc_in_box(box: BBox, pc, box_scaling=1.0):
    """ the points inside an oriented box, all columns of pc are kept
    """
    mask = pc_in_box_inner(float(box.x), float(box.y), float(box.z),
                           float(box.l), float(box.w), float(box.h), float(box.o),
                           pc, box_scaling)
    return pc[mask]


@numba.njit
def pc_in_box_inner(center_x, center_y, center_z, length, width, height, yaw, pc, box_scaling=1.0):
    mask = np.zeros(pc.shape[0], dtype=np.bool_)
    yaw_cos, yaw_sin = np.cos(yaw), np.sin(yaw)
    for i in range(pc.shape[0]):
        rx = np.abs((pc[i, 0] - center_x) * yaw_cos + (pc[i, 1] - center_y) * yaw_sin)
        ry = np.abs((pc[i, 0] - center_x) * -yaw_sin + (pc[i, 1] - center_y) * yaw_cos)
        rz = np.abs(pc[i, 2] - center_z)

        if rx < (length * box_scaling / 2) and ry < (width * box_scaling / 2) and rz < (height * box_scaling / 2):
            mask[i] = True
    return mask

