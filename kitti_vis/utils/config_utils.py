import yaml
from copy import deepcopy


__all__ = ['DEFAULT_CONFIGS', 'load_configs', 'merge_configs']


DEFAULT_CONFIGS = {
    'data': {
        'root': './data/kitti_raw',
        'date': '2011_09_26',
        'datasets': None,           # None means every drive found under root/date
    },
    'display': {
        'point_size': 0.04,
        'tracklet_point_size': 0.06,
        'point_color': [255, 255, 255],
        'centered_color': [0, 255, 0],
        'tracklet_offset': 6.0,
        'default_color': [128, 128, 128],
        'colors': {
            'Car': [255, 0, 0],
            'Van': [255, 128, 0],
            'Truck': [255, 255, 0],
            'Pedestrian': [0, 255, 255],
            'Person_sitting': [0, 128, 255],
            'Cyclist': [255, 0, 255],
            'Tram': [128, 0, 255],
            'Misc': [128, 255, 128],
        },
    },
    'layers': {
        'raw_cloud': True,
        'bounding_boxes': True,
        'cropped_tracklets': True,
        'centered_selection': True,
    },
    'viewer': {
        'host': '0.0.0.0',
        'port': 8080,
        'default_view': 'birds_eye',
        'snapshot_folder': './snapshots',
    },
}


def merge_configs(defaults, overrides):
    """ recursively fill the keys missing in overrides from defaults
    """
    result = deepcopy(defaults)
    if overrides is None:
        return result
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = merge_configs(result[key], value)
        else:
            result[key] = value
    return result


def load_configs(config_path=None):
    if config_path is None:
        return deepcopy(DEFAULT_CONFIGS)
    with open(config_path, 'r') as f:
        configs = yaml.safe_load(f)
    return merge_configs(DEFAULT_CONFIGS, configs)
