from . import card, dashboard, general
