""" top level of a viewing session
    input events are queued by the controls and dispatched one by one on the thread running the session,
    every request runs to completion before the next event is taken
"""
import os, queue
from .navigation import NavigationStateMachine
from .visualization import Visualizer2D
from .events import DATASET, FRAME, TRACKLET, LAYER, CAMERA, KEY, SNAPSHOT, EXIT
from . import utils


# eye position, look-at point, up vector
CAMERA_VIEWS = {
    'front': ((-100, 0, 0), (-17, 9.5, -9.5), (0, 0, 1)),
    'eye_level': ((-100, 0, 20), (-17, 9.5, -9.5), (0, 0, 1)),
    'birds_eye': ((-100, 10, 30), (-17, 9.5, -9.5), (0, 0, 1)),
    'left_pers': ((22, 150, 57), (1, -57, 8), (0, 0, 1)),
    'right_pers': ((-22, -150, 57), (1, -57, 8), (0, 0, 1)),
    'top': ((1, 29, -110), (21, 6, 147), (0, -1, 0)),     # facing down on y
}
DEFAULT_VIEW = 'birds_eye'


class SessionController:
    def __init__(self, provider, renderer, configs, status=None):
        self.provider = provider
        self.renderer = renderer
        self.configs = configs
        self.machine = NavigationStateMachine(provider, renderer, configs, status)
        self.events = queue.Queue()
        self.running = False
        self.view = None

    def start(self, dataset_index=0, view=None, dataset=None):
        self.machine.start(dataset_index, dataset)
        self.set_view(view if view is not None else self.configs['viewer'].get('default_view', DEFAULT_VIEW))
        self.running = True

    def post(self, event):
        """ thread safe, called from the toolkit callbacks
        """
        self.events.put(event)

    def process_events(self):
        """ dispatch every queued event, returns how many were handled
        """
        handled = 0
        while True:
            try:
                event = self.events.get_nowait()
            except queue.Empty:
                return handled
            self.dispatch(event)
            handled += 1

    def run(self, poll_interval=0.05):
        while self.running:
            try:
                event = self.events.get(timeout=poll_interval)
            except queue.Empty:
                continue
            self.dispatch(event)

    def dispatch(self, event):
        kind, value = event
        if kind == DATASET:
            self.machine.request_dataset(value)
        elif kind == FRAME:
            self.machine.request_frame(value)
        elif kind == TRACKLET:
            self.machine.request_tracklet(value)
        elif kind == LAYER:
            name, visible = value
            self.machine.set_layer_visible(name, visible)
        elif kind == CAMERA:
            self.set_view(value)
        elif kind == KEY:
            self.key_pressed(value)
        elif kind == SNAPSHOT:
            self.save_snapshot()
        elif kind == EXIT:
            self.running = False
        else:
            raise ValueError('unknown event kind {:}'.format(kind))

    def key_pressed(self, key):
        if key == 'Left':
            self.machine.previous_frame()
        elif key == 'Right':
            self.machine.next_frame()

    def set_view(self, name):
        """ unknown names fall back to the top view
        """
        print('Selected view: {:}'.format(name))
        if name not in CAMERA_VIEWS:
            name = 'top'
        eye, look_at, up = CAMERA_VIEWS[name]
        self.renderer.set_camera(eye, look_at, up)
        self.renderer.request_redraw()
        self.view = name

    def save_snapshot(self, folder=None):
        """ bird's-eye image of the current frame and its tracklet boxes
        """
        machine = self.machine
        if folder is None:
            folder = self.configs['viewer']['snapshot_folder']
        os.makedirs(folder, exist_ok=True)
        path = os.path.join(folder, '{:04d}_{:010d}.png'.format(
            machine.dataset_number, machine.state.frame_index))

        visualizer = Visualizer2D(name='{:}_{:}'.format(machine.dataset_number, machine.state.frame_index))
        visualizer.handler_pc(machine.frame.xyz)
        for i, tracklet in enumerate(machine.index.active):
            box = utils.world_box(tracklet, machine.state.frame_index)
            visualizer.handler_box(box, message=tracklet.object_type, color=machine.index.color(i))
        visualizer.save(path)
        visualizer.close()
        print('saved snapshot: {:}'.format(path))
        return path
