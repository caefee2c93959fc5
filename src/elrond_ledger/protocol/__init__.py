"""Protocol layer: frame splitting, command catalog, and response decoding."""

from .framing import CommandFrame, split
from .commands import Operation, COMMAND_TABLE
from .parser import (
    parse_address,
    parse_signature,
    parse_auth_token,
    parse_app_configuration,
    parse_signing_response,
)
