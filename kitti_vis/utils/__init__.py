from .geometry import *
from .data_utils import *
from .config_utils import *
