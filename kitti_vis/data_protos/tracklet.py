""" annotation records of the KITTI raw tracklet files
    a tracklet holds one pose for every frame in [first_frame, last_frame]
"""


class Pose:
    def __init__(self, tx=0.0, ty=0.0, tz=0.0, rx=0.0, ry=0.0, rz=0.0):
        self.tx = tx
        self.ty = ty
        self.tz = tz     # bottom of the object, not its center
        self.rx = rx
        self.ry = ry
        self.rz = rz     # yaw

    def __repr__(self):
        return 'Pose({:.2f}, {:.2f}, {:.2f}, rz={:.2f})'.format(self.tx, self.ty, self.tz, self.rz)


class Tracklet:
    def __init__(self, id, object_type, h, w, l, first_frame, poses=None):
        self.id = id                     # position in the data set's tracklet file
        self.object_type = object_type
        self.h = h
        self.w = w
        self.l = l
        self.first_frame = first_frame
        self.poses = list(poses) if poses is not None else list()

    @property
    def last_frame(self):
        return self.first_frame + len(self.poses) - 1

    def contains_frame(self, frame_index):
        return self.first_frame <= frame_index <= self.last_frame

    def pose_at(self, frame_index):
        """ the pose at an absolute frame index of the data set
        """
        return self.poses[frame_index - self.first_frame]

    def __repr__(self):
        return 'Tracklet({:}, {:}, frames {:}-{:})'.format(
            self.id, self.object_type, self.first_frame, self.last_frame)
