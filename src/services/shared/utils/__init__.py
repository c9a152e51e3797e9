from .clock import TenantClock as TenantClock
from .http_response import api_response as api_response
from .http_response import error_response as error_response
from .http_response import to_error_response as to_error_response
from .validators import to_int as to_int
