"""Codecheckers registry download and parsing."""

import csv
import io
import logging

import httpx

from .models import CodecheckerProfile

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("handle", "fields", "languages")


def parse_codecheckers_csv(csv_text: str) -> dict[str, CodecheckerProfile]:
    """Parse the codecheckers registry CSV.

    Rows need a handle and at least one of fields/languages. A leading "@"
    on handles is dropped.

    Args:
        csv_text: Raw CSV content with a header row

    Returns:
        Mapping of GitHub handle to profile
    """
    reader = csv.DictReader(io.StringIO(csv_text))
    columns = [name.strip() for name in reader.fieldnames or []]
    missing = [column for column in REQUIRED_COLUMNS if column not in columns]
    if missing:
        logger.warning(
            "Missing required columns in codecheckers CSV: %s", ", ".join(missing)
        )
        return {}
    reader.fieldnames = columns

    profiles: dict[str, CodecheckerProfile] = {}
    for row in reader:
        handle = (row.get("handle") or "").strip().lstrip("@")
        fields = (row.get("fields") or "").strip()
        languages = (row.get("languages") or "").strip()
        if not handle or not (fields or languages):
            continue
        name = (row.get("name") or "").strip()
        profiles[handle] = CodecheckerProfile(
            handle=handle,
            name=name or handle,
            fields=fields,
            languages=languages,
        )
    return profiles


async def fetch_codecheckers(
    url: str, timeout: float = 30.0
) -> dict[str, CodecheckerProfile]:
    """Download and parse the codecheckers registry.

    Registry metadata only decorates reports, so failures are logged and an
    empty mapping is returned.

    Args:
        url: Location of the registry CSV
        timeout: Request timeout in seconds

    Returns:
        Mapping of GitHub handle to profile (empty on failure)
    """
    try:
        async with httpx.AsyncClient(timeout=timeout) as client:
            response = await client.get(url)
            response.raise_for_status()
    except httpx.HTTPStatusError as e:
        logger.warning("Failed to fetch codecheckers CSV: %s", e.response.status_code)
        return {}
    except httpx.HTTPError as e:
        logger.warning("Error fetching codecheckers metadata: %s", e)
        return {}

    profiles = parse_codecheckers_csv(response.text)
    logger.info("Loaded metadata for %d codecheckers", len(profiles))
    return profiles
