from strong_mcp.strong.client import Include, StrongClient
from strong_mcp.strong.models import (
    Cell, CellKind, CellSet, CellSetGroup, Log, Measurement, MeasurementsResponse,
    UserResponse, merge_pages,
)
from strong_mcp.strong.exceptions import (
    StrongError, AuthenticationError, TokenExpiredError, APIError, PayloadError,
)

__all__ = [
    "StrongClient", "Include",
    "Cell", "CellKind", "CellSet", "CellSetGroup", "Log",
    "Measurement", "MeasurementsResponse", "UserResponse", "merge_pages",
    "StrongError", "AuthenticationError", "TokenExpiredError", "APIError", "PayloadError",
]
