""" discrete input events, posted by the controls and handled one at a time by the session
"""
from collections import namedtuple


DATASET = 'dataset'        # value: requested data set index
FRAME = 'frame'            # value: requested frame index
TRACKLET = 'tracklet'      # value: requested tracklet index
LAYER = 'layer'            # value: (layer name, visible)
CAMERA = 'camera'          # value: camera preset name
KEY = 'key'                # value: 'Left' or 'Right'
SNAPSHOT = 'snapshot'
EXIT = 'exit'


InputEvent = namedtuple('InputEvent', ['kind', 'value'])
