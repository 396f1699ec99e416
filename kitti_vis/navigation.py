""" the navigation state machine of a viewing session
    state: the index triple (dataset, frame, tracklet), the four layer flags and the open data set
    every change of data set or frame runs the same protocol:
        hide every shown layer -> clear derived data -> mutate indices
        -> reload frame -> rebuild tracklets -> show flagged layers -> refresh status
"""
from . import utils
from .errors import DatasetOpenError, FrameReadError
from .frame_data import FrameData
from .tracklet import TrackletIndex, centered_cloud
from .visualization import scene
from .visualization.layers import LayerVisibilityController, LAYERS, \
    RAW_CLOUD, BOUNDING_BOXES, CROPPED_TRACKLETS, CENTERED_SELECTION


class SessionState:
    def __init__(self, visible=None):
        self.dataset_index = 0
        self.frame_index = 0
        self.tracklet_index = None      # None while no tracklet is active
        self.visible = {name: True for name in LAYERS}
        if visible is not None:
            self.visible.update(visible)
        self.dataset = None             # the open data set, owned by the session


class NavigationStateMachine:
    def __init__(self, provider, renderer, configs, status=None):
        """
        Args:
            provider: lists and opens data sets
            renderer (SceneRenderer): the scene the layers are drawn into
            configs (dict): display and layer sections are used
            status: optional surface with refresh(machine), called after every transition
        """
        self.provider = provider
        self.renderer = renderer
        self.configs = configs
        self.status = status

        self.display = configs['display']
        self.state = SessionState(configs['layers'])
        self.layers = LayerVisibilityController(renderer, self.state.visible)
        self.index = TrackletIndex(color_map=self.display['colors'],
                                   default_color=self.display['default_color'],
                                   offset=self.display['tracklet_offset'])
        self.dataset_numbers = list(provider.list_available())
        self.frame = None               # FrameData of the current frame
        self.centered = None            # centered selection cloud, None without selection
        self.labels = {'dataset': '', 'frame': '', 'tracklet': ''}

    # ---------- queries ----------

    def dataset_count(self):
        return len(self.dataset_numbers)

    def frame_count(self):
        return self.state.dataset.frame_count()

    @property
    def dataset_number(self):
        return utils.dataset_number(self.dataset_numbers, self.state.dataset_index)

    @property
    def selected_tracklet(self):
        if self.state.tracklet_index is None:
            return None
        return self.index.active[self.state.tracklet_index]

    # ---------- requests ----------

    def start(self, dataset_index=0, dataset=None):
        """ initial load, a DatasetOpenError here is fatal for the caller
            dataset: the already opened data set at dataset_index, opened here if None
        """
        if self.dataset_count() == 0:
            raise DatasetOpenError('no data sets available')
        self.state.dataset_index = utils.clamp_index(dataset_index, self.dataset_count())
        if dataset is None:
            dataset = self.provider.open(self.dataset_number)
        self.state.dataset = dataset
        self.state.frame_index = utils.clamp_index(self.state.frame_index, self.frame_count())
        self._reload(self._read_frame(self.state.dataset, self.state.frame_index))

    def request_dataset(self, value):
        """ switch to another data set, the frame index is kept if the new data set is long enough
        Returns:
            bool: False if the request was a no-op or refused
        """
        dataset_index = utils.clamp_index(value, self.dataset_count())
        if dataset_index == self.state.dataset_index:
            return False

        number = utils.dataset_number(self.dataset_numbers, dataset_index)
        try:
            dataset = self.provider.open(number)
            frame_index = utils.clamp_index(self.state.frame_index, dataset.frame_count())
            pc = self._read_frame(dataset, frame_index)
        except (DatasetOpenError, FrameReadError) as e:
            print('Cannot open data set {:}, keeping data set {:}: {:}'.format(number, self.dataset_number, e))
            self._refresh_status()
            return False

        self._unload()
        self.state.dataset_index = dataset_index
        self.state.dataset = dataset
        self.state.frame_index = frame_index
        self._reload(pc)
        return True

    def request_frame(self, value):
        frame_index = utils.clamp_index(value, self.frame_count())
        if frame_index == self.state.frame_index:
            return False

        try:
            pc = self._read_frame(self.state.dataset, frame_index)
        except FrameReadError as e:
            print('Cannot read frame {:}, keeping frame {:}: {:}'.format(frame_index, self.state.frame_index, e))
            self._refresh_status()
            return False

        self._unload()
        self.state.frame_index = frame_index
        self._reload(pc)
        return True

    def request_tracklet(self, value):
        """ selection changes only touch the centered selection layer
        """
        tracklet_index = utils.clamp_tracklet_index(value, len(self.index))
        if tracklet_index == self.state.tracklet_index:
            return False

        self.layers.hide_if_visible(CENTERED_SELECTION)
        self.state.tracklet_index = tracklet_index
        self._rebuild_centered()
        self.layers.show_if_visible(CENTERED_SELECTION, self.layer_items(CENTERED_SELECTION))
        self._refresh()
        return True

    def previous_frame(self):
        return self.request_frame(self.state.frame_index - 1)

    def next_frame(self):
        return self.request_frame(self.state.frame_index + 1)

    def set_layer_visible(self, name, value):
        """ only adds or removes geometry that is already computed
        """
        self.layers.set_visible(name, value, self.layer_items(name))
        self.renderer.request_redraw()

    # ---------- protocol ----------

    def _read_frame(self, dataset, frame_index):
        return dataset.point_cloud(frame_index)

    def _unload(self):
        self.layers.hide_if_visible(CENTERED_SELECTION)
        self.centered = None
        self.layers.hide_if_visible(CROPPED_TRACKLETS)
        self.layers.hide_if_visible(BOUNDING_BOXES)
        self.index.clear()
        self.layers.hide_if_visible(RAW_CLOUD)
        self.frame = None

    def _reload(self, pc):
        dataset, frame_index = self.state.dataset, self.state.frame_index
        self.frame = FrameData(frame_index, pc, dataset.image_path(frame_index))
        self.layers.show_if_visible(RAW_CLOUD, self.layer_items(RAW_CLOUD))

        self.index.rebuild(dataset.tracklets(), self.frame.pc, frame_index)
        self.layers.show_if_visible(BOUNDING_BOXES, self.layer_items(BOUNDING_BOXES))
        self.layers.show_if_visible(CROPPED_TRACKLETS, self.layer_items(CROPPED_TRACKLETS))

        self.state.tracklet_index = utils.clamp_tracklet_index(self.state.tracklet_index, len(self.index))
        self._rebuild_centered()
        self.layers.show_if_visible(CENTERED_SELECTION, self.layer_items(CENTERED_SELECTION))
        self._refresh()

    def _rebuild_centered(self):
        tracklet = self.selected_tracklet
        if tracklet is None:
            self.centered = None
        else:
            self.centered = centered_cloud(self.frame.pc, tracklet, self.state.frame_index)

    def _refresh_status(self):
        """ also called after a refused request, so the controls snap back to the kept state
        """
        if self.status is not None:
            self.status.refresh(self)

    def _refresh(self):
        self.labels = {
            'dataset': self.dataset_label(),
            'frame': self.frame_label(),
            'tracklet': self.tracklet_label(),
        }
        self._refresh_status()
        self.renderer.request_redraw()

    # ---------- scene content ----------

    def layer_items(self, name):
        """ (scene name, geometry, style) of everything a layer shows for the current state
        """
        if self.frame is None:
            return list()
        if name == RAW_CLOUD:
            style = {'color': tuple(self.display['point_color']), 'point_size': self.display['point_size']}
            return [(scene.POINT_CLOUD_NAME, self.frame.pc, style)]
        if name == BOUNDING_BOXES:
            frame_index = self.state.frame_index
            return [(scene.box_name(t), utils.world_box(t, frame_index), {'color': self.index.color(i)})
                    for i, t in enumerate(self.index.active)]
        if name == CROPPED_TRACKLETS:
            return [(scene.points_name(t), self.index.cropped[i],
                     {'color': self.index.color(i), 'point_size': self.display['tracklet_point_size']})
                    for i, t in enumerate(self.index.active)]
        if name == CENTERED_SELECTION:
            if self.centered is None:
                return list()
            style = {'color': tuple(self.display['centered_color']),
                     'point_size': self.display['tracklet_point_size']}
            return [(scene.CENTERED_NAME, self.centered, style)]
        raise KeyError('unknown layer {:}'.format(name))

    # ---------- status ----------

    def dataset_label(self):
        return 'Data set: {:} of {:} [{:}]'.format(
            self.state.dataset_index + 1, self.dataset_count(), self.dataset_number)

    def frame_label(self):
        return 'Frame: {:} of {:}'.format(self.state.frame_index + 1, self.frame_count())

    def tracklet_label(self):
        tracklet_index = self.state.tracklet_index
        if tracklet_index is None:
            return 'Tracklet: 0 of 0'
        tracklet = self.index.active[tracklet_index]
        return 'Tracklet: {:} of {:} ("{:}", {:} points)'.format(
            tracklet_index + 1, len(self.index), tracklet.object_type, self.index.point_num(tracklet_index))

