"""Content extractor - pulls a content/title pair out of arbitrary webhook JSON.

Upstream workflows return a handful of loosely defined shapes. The common one
is a list whose first item carries the generated text under ``output`` and a
DingTalk message under ``dingtalkPayload.markdown``::

    [{"output": "...", "dingtalkPayload": {"markdown": {"title": "..."}}}]

Anything unrecognized is kept as-is so the dashboard still has something to show.
"""
import logging
from typing import Any

logger = logging.getLogger(__name__)


def _as_mapping(value: Any, name: str) -> dict | None:
    """None means absent; any other non-mapping is a malformed payload."""
    if value is None or isinstance(value, dict):
        return value
    raise TypeError(f"'{name}' is {type(value).__name__}, expected an object")


def _extract_title(item: dict) -> str | None:
    """Return dingtalkPayload.markdown.title as a string, or None if any level is missing."""
    dingtalk = _as_mapping(item.get("dingtalkPayload"), "dingtalkPayload")
    if dingtalk is None:
        logger.warning("No 'dingtalkPayload' field found")
        return None
    markdown = _as_mapping(dingtalk.get("markdown"), "markdown")
    if markdown is None:
        logger.warning("No 'markdown' field found in dingtalkPayload")
        return None
    if "title" not in markdown:
        logger.warning("No 'title' field found in markdown object")
        return None
    title = markdown["title"]
    if title is None:
        return None
    return str(title)


def extract_output_content(data: Any) -> dict[str, Any]:
    """Normalize a decoded JSON value into a mapping. Never raises."""
    try:
        logger.debug("Extracting output content from data type: %s", type(data).__name__)

        if isinstance(data, list):
            logger.debug("Data is a list with %d items", len(data))
            if data and isinstance(data[0], dict):
                first = data[0]
                if "output" in first:
                    result: dict[str, Any] = {"content": first["output"]}
                    title = _extract_title(first)
                    if title is not None:
                        result["title"] = title
                        logger.info("Extracted title: %s", title)
                    return result
                logger.warning("No 'output' field found in first item")

        elif isinstance(data, dict):
            logger.debug("Data is a mapping with keys: %s", list(data))
            if "output" in data:
                return {"content": data["output"]}
            return data

        logger.warning("Could not extract output content, returning raw data")
        return {"raw_data": data}

    except Exception as e:
        logger.error("Error extracting output content: %s", e)
        return {
            "parse_error": f"Unable to extract content: {e}",
            "raw_data": str(data),
        }
