from .api import current_principal as current_principal
from .api import request_body as request_body
from .api import register_exception_handlers as register_exception_handlers
from .api import require_admin as require_admin
from .cors import build_cors_config as build_cors_config
from .http_response import json_response as json_response
from .http_response import redirect_response as redirect_response
from .principal import Principal as Principal
from .validators import to_decimal as to_decimal
