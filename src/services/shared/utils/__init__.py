from .distributed_lock import DistributedLock as DistributedLock
from .distributed_lock import run_with_lock as run_with_lock
from .http_response import api_error_boundary as api_error_boundary
from .http_response import api_response as api_response
from .http_response import error_response as error_response
from .logger import get_logger as get_logger
from .settings import PricingSettings as PricingSettings
from .settings import get_settings as get_settings
from .validators import to_decimal as to_decimal
from .validators import to_naive_datetime as to_naive_datetime
