""" Data loader for the KITTI raw recordings:
    <root>/<date>/<date>_drive_<NNNN>_sync/
        velodyne_points/data/<frame:010d>.bin
        image_02/data/<frame:010d>.png
        tracklet_labels.xml
    The provider lists the drives, every drive is opened as a KittiDataset
"""
import os, re, numpy as np
import xml.etree.ElementTree as ET
from kitti_vis.data_protos import Pose, Tracklet
from kitti_vis.errors import DatasetOpenError, FrameReadError


DRIVE_PATTERN = re.compile(r'^(?P<date>\d{4}_\d{2}_\d{2})_drive_(?P<number>\d{4})_sync$')


def drive_folder_name(date, number):
    return '{:}_drive_{:04d}_sync'.format(date, number)


def load_velodyne(path):
    """ N * 4 float32 array, x y z and reflectance
    """
    pc = np.fromfile(path, dtype=np.float32)
    return pc.reshape((-1, 4))


def parse_tracklets(path):
    """ read a tracklet_labels.xml (boost serialization format) into Tracklets
        the order of the items in the file is kept, the position becomes the tracklet id
    """
    try:
        root = ET.parse(path).getroot()
    except (ET.ParseError, OSError) as e:
        raise DatasetOpenError('cannot read tracklets {:}: {:}'.format(path, e))

    tracklets_node = root.find('tracklets')
    if tracklets_node is None:
        raise DatasetOpenError('no tracklets found in {:}'.format(path))

    result = list()
    try:
        for item in tracklets_node.findall('item'):
            poses = list()
            for pose_item in item.find('poses').findall('item'):
                poses.append(Pose(
                    tx=float(pose_item.find('tx').text), ty=float(pose_item.find('ty').text),
                    tz=float(pose_item.find('tz').text), rx=float(pose_item.find('rx').text),
                    ry=float(pose_item.find('ry').text), rz=float(pose_item.find('rz').text)))
            result.append(Tracklet(
                id=len(result), object_type=item.find('objectType').text.strip(),
                h=float(item.find('h').text), w=float(item.find('w').text), l=float(item.find('l').text),
                first_frame=int(item.find('first_frame').text), poses=poses))
    except (AttributeError, ValueError) as e:
        raise DatasetOpenError('corrupt tracklet file {:}: {:}'.format(path, e))
    return result


class KittiDataset:
    def __init__(self, data_folder, date, number):
        """ open one drive, the tracklets are parsed once here
        Args:
            data_folder (str): root of the KITTI raw data
            date (str): recording date, e.g. 2011_09_26
            number (int): drive number
        """
        self.dataset_number = number
        self.folder = os.path.join(data_folder, date, drive_folder_name(date, number))
        if not os.path.isdir(self.folder):
            raise DatasetOpenError('data set folder {:} does not exist'.format(self.folder))

        self.velodyne_folder = os.path.join(self.folder, 'velodyne_points', 'data')
        self.image_folder = os.path.join(self.folder, 'image_02', 'data')
        if not os.path.isdir(self.velodyne_folder):
            raise DatasetOpenError('no velodyne points in {:}'.format(self.folder))
        self.frame_num = len([f for f in os.listdir(self.velodyne_folder) if f.endswith('.bin')])
        if self.frame_num == 0:
            raise DatasetOpenError('no frames in {:}'.format(self.velodyne_folder))

        self._tracklets = parse_tracklets(os.path.join(self.folder, 'tracklet_labels.xml'))

    def frame_count(self):
        return self.frame_num

    def point_cloud(self, frame_index):
        if frame_index < 0 or frame_index >= self.frame_num:
            raise FrameReadError('frame {:} out of range [0, {:}]'.format(frame_index, self.frame_num - 1))
        path = os.path.join(self.velodyne_folder, '{:010d}.bin'.format(frame_index))
        if not os.path.exists(path):
            raise FrameReadError('frame file {:} is missing'.format(path))
        return load_velodyne(path)

    def image_path(self, frame_index):
        return os.path.join(self.image_folder, '{:010d}.png'.format(frame_index))

    def tracklets(self):
        return self._tracklets

    def __len__(self):
        return self.frame_num


class KittiProvider:
    def __init__(self, configs):
        self.configs = configs
        self.data_folder = configs['data']['root']
        self.date = str(configs['data']['date'])
        self.numbers = configs['data']['datasets']

    def list_available(self):
        """ drive numbers in slider order
        """
        if self.numbers is not None:
            return list(self.numbers)
        date_folder = os.path.join(self.data_folder, self.date)
        if not os.path.isdir(date_folder):
            return list()
        numbers = list()
        for name in os.listdir(date_folder):
            match = DRIVE_PATTERN.match(name)
            if match is not None and match.group('date') == self.date:
                numbers.append(int(match.group('number')))
        return sorted(numbers)

    def open(self, number):
        return KittiDataset(self.data_folder, self.date, number)
