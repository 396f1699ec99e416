""" the four independently toggled groups of scene objects
    a layer remembers the names it put into the scene, so show never doubles
    an object and hide removes exactly what is there
"""


RAW_CLOUD = 'raw_cloud'
BOUNDING_BOXES = 'bounding_boxes'
CROPPED_TRACKLETS = 'cropped_tracklets'
CENTERED_SELECTION = 'centered_selection'
LAYERS = [RAW_CLOUD, BOUNDING_BOXES, CROPPED_TRACKLETS, CENTERED_SELECTION]


class Layer:
    def __init__(self, name, renderer):
        self.name = name
        self.renderer = renderer
        self.shown = list()      # names currently in the scene

    def show(self, items):
        """ items: [(name, geometry, style), ...]
        """
        names = [item[0] for item in items]
        for stale in self.shown:
            if stale not in names:
                self.renderer.remove(stale)
        for name, geometry, style in items:
            self.renderer.add_or_replace(name, geometry, style)
        self.shown = names

    def hide(self):
        for name in self.shown:
            self.renderer.remove(name)
        self.shown = list()


class LayerVisibilityController:
    def __init__(self, renderer, visible):
        """
        Args:
            renderer (SceneRenderer): the scene the layers draw into
            visible (dict): layer name -> flag, shared with the session state
        """
        for name in LAYERS:
            if name not in visible:
                raise KeyError('no visibility flag for layer {:}'.format(name))
        self.visible = visible
        self.layers = {name: Layer(name, renderer) for name in LAYERS}

    def is_visible(self, name):
        return self.visible[name]

    def show(self, name, items):
        self.layers[name].show(items)

    def hide(self, name):
        self.layers[name].hide()

    def show_if_visible(self, name, items):
        if self.visible[name]:
            self.show(name, items)

    def hide_if_visible(self, name):
        if self.visible[name]:
            self.hide(name)

    def set_visible(self, name, value, items):
        """ flip one flag and add / remove the already computed geometry
        """
        self.visible[name] = bool(value)
        if self.visible[name]:
            self.show(name, items)
        else:
            self.hide(name)

    def shown_names(self, name):
        return list(self.layers[name].shown)
