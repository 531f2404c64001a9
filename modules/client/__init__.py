from .api import *
from .debounce import *
from .layout import *
