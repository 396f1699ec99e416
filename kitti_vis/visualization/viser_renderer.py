""" the scene and the controls served to the browser by viser
    viser runs the gui callbacks on its own threads, the controls only post events
"""
import os
import numpy as np
import viser
from PIL import Image
from ..data_protos import BBox
from ..events import InputEvent, DATASET, FRAME, TRACKLET, LAYER, CAMERA, KEY, SNAPSHOT, EXIT
from .scene import SceneRenderer
from .layers import RAW_CLOUD, BOUNDING_BOXES, CROPPED_TRACKLETS, CENTERED_SELECTION


class ViserRenderer(SceneRenderer):
    def __init__(self, server: viser.ViserServer, point_size=0.04):
        self.server = server
        self.point_size = point_size
        self.names = set()
        self.camera = None

        @server.on_client_connect
        def _(client: viser.ClientHandle):
            if self.camera is not None:
                self._apply_camera(client, *self.camera)

    def add_or_replace(self, name, geometry, style):
        color = tuple(int(c) for c in style.get('color', (255, 255, 255)))
        if isinstance(geometry, BBox):
            self.server.scene.add_box(
                name,
                color=color,
                dimensions=tuple(float(d) for d in BBox.bbox2extents(geometry)),
                wireframe=True,
                wxyz=tuple(float(q) for q in BBox.bbox2quaternion(geometry).elements),
                position=tuple(float(p) for p in BBox.bbox2center(geometry)),
            )
        else:
            points = np.asarray(geometry)[:, :3].astype(np.float32)
            self.server.scene.add_point_cloud(
                name,
                points=points,
                colors=color,
                point_size=style.get('point_size', self.point_size),
                point_shape='rounded',
            )
        self.names.add(name)

    def remove(self, name):
        if name not in self.names:
            return
        self.server.scene.remove_by_name(name)
        self.names.discard(name)

    def set_camera(self, eye, look_at, up):
        self.camera = (tuple(eye), tuple(look_at), tuple(up))
        for client in self.server.get_clients().values():
            self._apply_camera(client, *self.camera)

    def _apply_camera(self, client, eye, look_at, up):
        client.camera.up_direction = up
        client.camera.position = eye
        client.camera.look_at = look_at

    def request_redraw(self):
        self.server.flush()


class ViserControlPanel:
    """ sliders, checkboxes and status fields of the session
        refresh() is called by the navigation state machine after every transition
    """
    def __init__(self, server: viser.ViserServer, post, dataset_num, camera_views, default_view, visible):
        self.server = server
        self.post = post

        with server.gui.add_folder('Navigation'):
            self.gui_dataset = server.gui.add_slider(
                'Data set', min=0, max=max(dataset_num - 1, 0), step=1, initial_value=0)
            self.gui_dataset_label = server.gui.add_text('Data set status', initial_value='', disabled=True)
            self.gui_frame = server.gui.add_slider('Frame', min=0, max=0, step=1, initial_value=0)
            self.gui_frame_label = server.gui.add_text('Frame status', initial_value='', disabled=True)
            self.gui_tracklet = server.gui.add_slider('Tracklet', min=0, max=0, step=1, initial_value=0)
            self.gui_tracklet_label = server.gui.add_text('Tracklet status', initial_value='', disabled=True)
            gui_previous = server.gui.add_button('Previous frame')
            gui_next = server.gui.add_button('Next frame')

        with server.gui.add_folder('Layers'):
            gui_layers = {
                RAW_CLOUD: server.gui.add_checkbox('Frame point cloud', initial_value=visible[RAW_CLOUD]),
                BOUNDING_BOXES: server.gui.add_checkbox(
                    'Tracklet bounding boxes', initial_value=visible[BOUNDING_BOXES]),
                CROPPED_TRACKLETS: server.gui.add_checkbox(
                    'Tracklet point clouds', initial_value=visible[CROPPED_TRACKLETS]),
                CENTERED_SELECTION: server.gui.add_checkbox(
                    'Tracklet in center', initial_value=visible[CENTERED_SELECTION]),
            }

        with server.gui.add_folder('View'):
            gui_view = server.gui.add_dropdown('Camera', options=list(camera_views), initial_value=default_view)
            gui_snapshot = server.gui.add_button('Save snapshot')
            gui_exit = server.gui.add_button('Exit')

        with server.gui.add_folder('Camera image'):
            self.gui_image = server.gui.add_image(
                np.zeros((120, 400, 3), dtype=np.uint8), label='image_02', format='jpeg', jpeg_quality=80)
        self.image_path = None

        @self.gui_dataset.on_update
        def _(event):
            self.from_client(event, InputEvent(DATASET, int(self.gui_dataset.value)))

        @self.gui_frame.on_update
        def _(event):
            self.from_client(event, InputEvent(FRAME, int(self.gui_frame.value)))

        @self.gui_tracklet.on_update
        def _(event):
            self.from_client(event, InputEvent(TRACKLET, int(self.gui_tracklet.value)))

        @gui_previous.on_click
        def _(event):
            self.from_client(event, InputEvent(KEY, 'Left'))

        @gui_next.on_click
        def _(event):
            self.from_client(event, InputEvent(KEY, 'Right'))

        for name, checkbox in gui_layers.items():
            def _on_toggle(event, name=name, checkbox=checkbox):
                self.from_client(event, InputEvent(LAYER, (name, bool(checkbox.value))))
            checkbox.on_update(_on_toggle)

        @gui_view.on_update
        def _(event):
            self.from_client(event, InputEvent(CAMERA, gui_view.value))

        @gui_snapshot.on_click
        def _(event):
            self.from_client(event, InputEvent(SNAPSHOT, None))

        @gui_exit.on_click
        def _(event):
            self.from_client(event, InputEvent(EXIT, None))

    def from_client(self, event, input_event):
        """ post input_event if a browser caused it
            the writes of refresh() come back without a client and are dropped,
            otherwise they would be queued again as requests
        """
        if event.client is None:
            return False
        self.post(input_event)
        return True

    def refresh(self, machine):
        """ labels, slider ranges and camera image after a transition
            the slider writes made here are not posted back, see from_client
        """
        state = machine.state
        labels = machine.labels
        self.gui_dataset.value = state.dataset_index
        self.gui_frame.max = max(machine.frame_count() - 1, 0)
        self.gui_frame.value = state.frame_index
        self.gui_tracklet.max = max(len(machine.index) - 1, 0)
        self.gui_tracklet.value = state.tracklet_index if state.tracklet_index is not None else 0
        self.gui_dataset_label.value = labels['dataset']
        self.gui_frame_label.value = labels['frame']
        self.gui_tracklet_label.value = labels['tracklet']

        image_path = machine.frame.image_path if machine.frame is not None else None
        if image_path != self.image_path:
            self.image_path = image_path
            if image_path is not None and os.path.exists(image_path):
                self.gui_image.image = np.asarray(Image.open(image_path).convert('RGB'))
                print('loaded: {:}'.format(image_path))
            else:
                print('no camera image at {:}'.format(image_path))
