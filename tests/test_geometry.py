"""Tests for the box, centering and cropping transforms."""

import numpy as np
import pytest

from kitti_vis import utils
from kitti_vis.data_protos import BBox, Pose, Tracklet


def single_pose_tracklet(tx, ty, tz, rz, h=1.5, w=1.6, l=3.9, first_frame=4):
    return Tracklet(id=0, object_type="Car", h=h, w=w, l=l, first_frame=first_frame,
                    poses=[Pose(tx=tx, ty=ty, tz=tz, rz=rz)])


def test_world_box_lifts_center_by_half_height():
    tracklet = single_pose_tracklet(3.0, -2.0, -1.0, 0.7)
    box = utils.world_box(tracklet, 4)
    np.testing.assert_allclose(BBox.bbox2center(box), [3.0, -2.0, -0.25])
    np.testing.assert_allclose(BBox.bbox2extents(box), [3.9, 1.6, 1.5])
    assert box.o == pytest.approx(0.7)


def test_world_box_orientation_is_yaw_about_z():
    tracklet = single_pose_tracklet(0.0, 0.0, 0.0, np.pi / 2)
    rotation = BBox.bbox2quaternion(utils.world_box(tracklet, 4))
    np.testing.assert_allclose(rotation.rotate([1.0, 0.0, 0.0]), [0.0, 1.0, 0.0], atol=1e-9)
    np.testing.assert_allclose(rotation.rotate([0.0, 0.0, 1.0]), [0.0, 0.0, 1.0], atol=1e-9)


def test_world_box_uses_pose_of_requested_frame():
    tracklet = Tracklet(id=0, object_type="Van", h=2.0, w=2.0, l=4.0, first_frame=10,
                        poses=[Pose(tx=0.0), Pose(tx=1.0), Pose(tx=2.0)])
    assert utils.world_box(tracklet, 12).x == 2.0


@pytest.mark.parametrize("seed", range(5))
def test_centering_moves_box_center_to_origin(seed):
    rng = np.random.RandomState(seed)
    tx, ty, tz = rng.uniform(-40, 40, size=3)
    rz = rng.uniform(-np.pi, np.pi)
    tracklet = single_pose_tracklet(tx, ty, tz, rz)
    box = utils.world_box(tracklet, 4)

    translation, rotation = utils.centering_transform(tracklet, 4)
    center = np.array([[box.x, box.y, box.z]])
    np.testing.assert_allclose(utils.apply_centering(center, translation, rotation), [[0.0, 0.0, 0.0]], atol=1e-9)

    # the heading of the box ends up on the x axis
    heading = BBox.bbox2quaternion(box).rotate([1.0, 0.0, 0.0])
    np.testing.assert_allclose(rotation.rotate(heading), [1.0, 0.0, 0.0], atol=1e-9)


def test_centering_translates_before_rotating():
    tracklet = single_pose_tracklet(10.0, 0.0, -1.0, np.pi / 2, h=2.0)
    translation, rotation = utils.centering_transform(tracklet, 4)
    # one meter ahead of the object along its heading (+y in world)
    point = np.array([[10.0, 1.0, 0.0, 0.8]])
    centered = utils.apply_centering(point, translation, rotation)
    np.testing.assert_allclose(centered, [[1.0, 0.0, 0.0, 0.8]], atol=1e-9)


def test_display_offset_is_vertical():
    tracklet = single_pose_tracklet(0.0, 0.0, 0.0, 0.0)
    np.testing.assert_allclose(utils.display_offset(tracklet), [0.0, 0.0, 6.0])
    np.testing.assert_allclose(utils.display_offset(tracklet, 2.5), [0.0, 0.0, 2.5])


def test_translate_points_keeps_intensity_and_input():
    points = np.array([[1.0, 2.0, 3.0, 0.25]], dtype=np.float32)
    moved = utils.translate_points(points, [0.0, 0.0, 6.0])
    np.testing.assert_allclose(moved, [[1.0, 2.0, 9.0, 0.25]])
    np.testing.assert_allclose(points, [[1.0, 2.0, 3.0, 0.25]])


def test_pc_in_box_respects_orientation():
    box = BBox(x=0.0, y=0.0, z=0.0, l=4.0, w=1.0, h=2.0, o=np.pi / 2)
    pc = np.array([
        [0.0, 1.5, 0.0, 0.1],    # along the rotated length
        [1.5, 0.0, 0.0, 0.2],    # along the unrotated length, outside
        [0.0, 0.0, 0.9, 0.3],
        [0.0, 0.0, 1.1, 0.4],    # above the box
    ], dtype=np.float32)
    inside = utils.pc_in_box(box, pc)
    assert inside.shape == (2, 4)
    np.testing.assert_allclose(inside[:, 3], [0.1, 0.3])


def test_pc_in_box_empty_cloud():
    box = BBox(x=0.0, y=0.0, z=0.0, l=1.0, w=1.0, h=1.0, o=0.0)
    assert utils.pc_in_box(box, np.zeros((0, 4), dtype=np.float32)).shape == (0, 4)


def test_transformation_matrix_rotates_then_translates():
    matrix = utils.make_transformation_matrix((1.0, 2.0, 3.0, np.pi / 2))
    np.testing.assert_allclose(matrix @ [1.0, 0.0, 0.0, 1.0], [1.0, 3.0, 3.0, 1.0], atol=1e-9)
    np.testing.assert_allclose(matrix[3], [0.0, 0.0, 0.0, 1.0])


@pytest.mark.parametrize("seed", range(3))
def test_object_to_world_matrix_undoes_centering(seed):
    rng = np.random.RandomState(seed)
    tracklet = single_pose_tracklet(*rng.uniform(-20, 20, size=3), rz=rng.uniform(-np.pi, np.pi))
    box = utils.world_box(tracklet, 4)
    points = np.hstack([rng.uniform(-30, 30, size=(6, 3)), np.full((6, 1), 0.7)])

    translation, rotation = utils.centering_transform(tracklet, 4)
    centered = utils.apply_centering(points, translation, rotation)
    matrix = utils.make_transformation_matrix((box.x, box.y, box.z, box.o))
    homogeneous = np.hstack([centered[:, :3], np.ones((6, 1))])
    np.testing.assert_allclose((matrix @ homogeneous.T).T[:, :3], points[:, :3], atol=1e-9)
