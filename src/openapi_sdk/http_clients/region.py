"""
Jurisdiction predicate used to pick the API base URL
"""

import os

ENV_REGION = "OPENAPI_REGION"


async def is_cn() -> bool:
    """Return True when calls should go to the domestic (CN) endpoint."""
    return os.getenv(ENV_REGION, "").strip().lower() == "cn"
