""" contract of the retained mode 3D scene the viewer draws into
    objects are addressed by name, adding under an existing name replaces the old object
"""


POINT_CLOUD_NAME = '/point_cloud'
CENTERED_NAME = '/tracklets/centered'


def box_name(tracklet):
    return '/tracklets/boxes/{:}'.format(tracklet.id)


def points_name(tracklet):
    return '/tracklets/points/{:}'.format(tracklet.id)


class SceneRenderer:
    def add_or_replace(self, name, geometry, style):
        """ geometry is an N * (>=3) point array or a BBox
            style carries 'color' (0-255 rgb) and optionally 'point_size'
        """
        raise NotImplementedError

    def remove(self, name):
        """ no-op if nothing is registered under name
        """
        raise NotImplementedError

    def set_camera(self, eye, look_at, up):
        raise NotImplementedError

    def request_redraw(self):
        raise NotImplementedError
