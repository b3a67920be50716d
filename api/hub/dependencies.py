import logging
import secrets

from fastapi import HTTPException, Security
from fastapi.security import APIKeyHeader

from hub.channels import settings

logger = logging.getLogger(__name__)

publish_key_header = APIKeyHeader(name="X-Publish-Key", auto_error=False)


async def require_publish_key(
    publish_key: str | None = Security(publish_key_header),
) -> None:
    """Guard for producers. Streaming endpoints stay open to any consumer.

    With no HUB_PUBLISH_KEYS configured (development) publishing is open.
    """
    keys = settings.get_publish_keys()
    if not keys:
        return
    if publish_key and any(
        secrets.compare_digest(publish_key, key) for key in keys
    ):
        return
    logger.warning("Rejected publish with %s key", "bad" if publish_key else "no")
    raise HTTPException(status_code=401, detail="Invalid or missing publish key")
