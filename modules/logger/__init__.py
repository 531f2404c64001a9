from .provisioner import ProvisionedLogger
from .time import TimeLogger, format_duration
