"""Shared fixtures: a recording scene, synthetic data sets and a status surface."""

import numpy as np
import pytest

from kitti_vis import utils
from kitti_vis.data_protos import BBox, Pose, Tracklet
from kitti_vis.errors import DatasetOpenError, FrameReadError
from kitti_vis.visualization.scene import SceneRenderer

BACKGROUND = np.array([[50.0, 50.0, 0.0, 0.1], [-50.0, -50.0, 0.0, 0.2]], dtype=np.float32)
# offsets from a box center, all inside a box of at least 2 x 2 x 2
INSIDE_OFFSETS = np.array([[0.0, 0.0, 0.0], [0.5, 0.3, 0.2], [-0.5, -0.3, -0.2]])


class RecordingRenderer(SceneRenderer):
    def __init__(self):
        self.objects = {}
        self.calls = []
        self.camera = None
        self.redraws = 0

    def add_or_replace(self, name, geometry, style):
        self.objects[name] = (geometry, style)
        self.calls.append(("add", name))

    def remove(self, name):
        self.objects.pop(name, None)
        self.calls.append(("remove", name))

    def set_camera(self, eye, look_at, up):
        self.camera = (eye, look_at, up)

    def request_redraw(self):
        self.redraws += 1


class RecordingStatus:
    def __init__(self):
        self.refreshes = []

    def refresh(self, machine):
        self.refreshes.append(dict(machine.labels))


class SyntheticDataset:
    """Each frame holds two far away points plus three points inside every active tracklet."""

    def __init__(self, number, frame_num, tracklets, missing_frames=()):
        self.dataset_number = number
        self.frame_num = frame_num
        self._tracklets = tracklets
        self.missing_frames = set(missing_frames)

    def frame_count(self):
        return self.frame_num

    def point_cloud(self, frame_index):
        if frame_index < 0 or frame_index >= self.frame_num or frame_index in self.missing_frames:
            raise FrameReadError(f"no frame {frame_index}")
        clouds = [BACKGROUND]
        for tracklet in self._tracklets:
            if tracklet.contains_frame(frame_index):
                center = BBox.bbox2center(utils.world_box(tracklet, frame_index))
                xyz = center + INSIDE_OFFSETS
                intensity = np.full((len(xyz), 1), 0.5)
                clouds.append(np.hstack([xyz, intensity]).astype(np.float32))
        return np.concatenate(clouds, axis=0)

    def image_path(self, frame_index):
        return f"images/{frame_index:010d}.png"

    def tracklets(self):
        return self._tracklets


class SyntheticProvider:
    """Maps drive numbers to data sets, None marks a drive that fails to open."""

    def __init__(self, datasets):
        self.datasets = datasets
        self.opened = []

    def list_available(self):
        return list(self.datasets)

    def open(self, number):
        self.opened.append(number)
        dataset = self.datasets[number]
        if dataset is None:
            raise DatasetOpenError(f"drive {number} is missing")
        return dataset


def make_tracklet(id, first_frame, frame_num, object_type="Car", tx=10.0, ty=0.0, tz=-1.0, rz=0.3):
    poses = [Pose(tx=tx + 0.5 * i, ty=ty, tz=tz, rz=rz) for i in range(frame_num)]
    return Tracklet(id=id, object_type=object_type, h=2.0, w=2.0, l=4.0, first_frame=first_frame, poses=poses)


@pytest.fixture
def configs():
    return utils.load_configs()


@pytest.fixture
def renderer():
    return RecordingRenderer()


@pytest.fixture
def status():
    return RecordingStatus()


@pytest.fixture
def provider():
    # drive 1: A in [5, 9], B in [0, 19], C in [3, 12]; drive 2: short, one tracklet; drive 5: empty
    drive_1 = SyntheticDataset(1, 20, [
        make_tracklet(0, 5, 5, "Car"),
        make_tracklet(1, 0, 20, "Pedestrian", tx=-8.0, ty=4.0, rz=-1.2),
        make_tracklet(2, 3, 10, "Cyclist", tx=0.0, ty=-12.0, rz=2.0),
    ])
    drive_2 = SyntheticDataset(2, 8, [make_tracklet(0, 0, 8, "Van", tx=5.0, ty=5.0)])
    drive_5 = SyntheticDataset(5, 12, [])
    return SyntheticProvider({1: drive_1, 2: drive_2, 5: drive_5})
