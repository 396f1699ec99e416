""" the tracklets visible at the current frame and the data derived from them
    active and cropped are index aligned: position i of both refers to the same tracklet
"""
from .. import utils


DEFAULT_COLOR = (128, 128, 128)


def rebuild_active_set(tracklets, frame_index):
    """ the tracklets with first_frame <= frame_index <= last_frame, in enumeration order
    """
    return [t for t in tracklets if t.first_frame <= frame_index <= t.last_frame]


def crop_tracklet(frame_cloud, tracklet, frame_index):
    box = utils.world_box(tracklet, frame_index)
    return utils.pc_in_box(box, frame_cloud)


def rebuild_cropped_clouds(frame_cloud, active_set, frame_index, offset=utils.TRACKLET_DISPLAY_OFFSET):
    """ one cropped cloud per active tracklet, lifted by the display offset
    """
    result = list()
    for tracklet in active_set:
        cropped = crop_tracklet(frame_cloud, tracklet, frame_index)
        result.append(utils.translate_points(cropped, utils.display_offset(tracklet, offset)))
    return result


def centered_cloud(frame_cloud, tracklet, frame_index):
    """ the tracklet's points at the origin with the recorded heading removed
    """
    cropped = crop_tracklet(frame_cloud, tracklet, frame_index)
    translation, rotation = utils.centering_transform(tracklet, frame_index)
    return utils.apply_centering(cropped, translation, rotation)


def color_for(tracklet, color_map=None, default=DEFAULT_COLOR):
    if color_map is None:
        color_map = utils.DEFAULT_CONFIGS['display']['colors']
    return tuple(color_map.get(tracklet.object_type, default))


class TrackletIndex:
    def __init__(self, color_map=None, default_color=DEFAULT_COLOR, offset=utils.TRACKLET_DISPLAY_OFFSET):
        self.active = list()       # active tracklets, dataset enumeration order
        self.cropped = list()      # cropped cloud for each active tracklet
        self.color_map = color_map
        self.default_color = tuple(default_color)
        self.offset = offset

    def rebuild(self, tracklets, frame_cloud, frame_index):
        """ replace both sequences, never patched in place
        """
        active = rebuild_active_set(tracklets, frame_index)
        cropped = rebuild_cropped_clouds(frame_cloud, active, frame_index, self.offset)
        self.active, self.cropped = active, cropped
        return self.active

    def clear(self):
        self.active = list()
        self.cropped = list()

    def color(self, index):
        return color_for(self.active[index], self.color_map, self.default_color)

    def point_num(self, index):
        return self.cropped[index].shape[0]

    def __len__(self):
        return len(self.active)
